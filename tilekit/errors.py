"""Fatal error reporting shared by the command-line tools."""

import os

__all__ = ["FatalError", "format_fatal"]


def format_fatal(message, err=None):
    """Build the text of a fatal diagnostic.

    A message ending in ``:`` is followed by the description of ``err``,
    which may be an errno number, an exception, or ``None``.
    """
    if not message.endswith(":") or err is None:
        return message
    if isinstance(err, int):
        reason = os.strerror(err)
    elif isinstance(err, OSError) and err.strerror:
        reason = err.strerror
    else:
        reason = str(err)
    return f"{message} {reason}"


class FatalError(Exception):
    """An unrecoverable error; the program should exit with ``status``."""

    status = 1

    def __init__(self, message, err=None):
        self.message = format_fatal(message, err)
        super().__init__(self.message)