"""Filter a list of files by their properties."""

import os
import stat
import sys
from dataclasses import dataclass, field

__all__ = ["StestOptions", "UsageError", "parse_args", "test_path", "select", "main"]

PROG = "stest"
USAGE = "usage: {prog} [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]"

_FLAGS = frozenset("abcdefghlpqrsuvwx")
_PATH_MAX = 4096


class UsageError(Exception):
    """The command line could not be understood."""


@dataclass
class StestOptions:
    """Selected tests; ``newer_than``/``older_than`` are mtimes in seconds."""

    flags: set = field(default_factory=set)
    newer_than: int | None = None
    older_than: int | None = None

    def has(self, flag):
        return flag in self.flags


def _mtime_seconds(path):
    return os.stat(path).st_mtime_ns // 1_000_000_000


def parse_args(argv):
    """Parse options; return ``(options, remaining paths)``.

    A reference file for ``-n``/``-o`` that cannot be examined is reported
    on stderr and its test is switched off.
    """
    options = StestOptions()
    args = list(argv)
    pos = 0
    while pos < len(args):
        arg = args[pos]
        if not (arg.startswith("-") and len(arg) > 1):
            break
        pos += 1
        if arg == "--":
            break
        j = 1
        while j < len(arg):
            flag = arg[j]
            if flag in ("n", "o"):
                value = arg[j + 1:]
                if not value:
                    if pos >= len(args):
                        raise UsageError(f"option -{flag} requires an argument")
                    value = args[pos]
                    pos += 1
                try:
                    mtime = _mtime_seconds(value)
                except (OSError, ValueError) as err:
                    reason = getattr(err, "strerror", None) or str(err)
                    print(f"{value}: {reason}", file=sys.stderr)
                    mtime = None
                if flag == "n":
                    options.newer_than = mtime
                else:
                    options.older_than = mtime
                break
            if flag not in _FLAGS:
                raise UsageError(f"unknown flag -{flag}")
            options.flags.add(flag)
            j += 1
    return options, args[pos:]


def _passes(path, name, options):
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return False
    mode = st.st_mode
    has = options.has
    if not has("a") and name.startswith("."):
        return False
    if has("b") and not stat.S_ISBLK(mode):
        return False
    if has("c") and not stat.S_ISCHR(mode):
        return False
    if has("d") and not stat.S_ISDIR(mode):
        return False
    if has("e") and not os.access(path, os.F_OK):
        return False
    if has("f") and not stat.S_ISREG(mode):
        return False
    if has("g") and not mode & stat.S_ISGID:
        return False
    if has("h"):
        try:
            if not stat.S_ISLNK(os.lstat(path).st_mode):
                return False
        except OSError:
            return False
    mtime = st.st_mtime_ns // 1_000_000_000
    if options.newer_than is not None and not mtime > options.newer_than:
        return False
    if options.older_than is not None and not mtime < options.older_than:
        return False
    if has("p") and not stat.S_ISFIFO(mode):
        return False
    if has("r") and not os.access(path, os.R_OK):
        return False
    if has("s") and not st.st_size > 0:
        return False
    if has("u") and not mode & stat.S_ISUID:
        return False
    if has("w") and not os.access(path, os.W_OK):
        return False
    if has("x") and not os.access(path, os.X_OK):
        return False
    return True


def test_path(path, name, options):
    """Return True if ``path`` satisfies the tests, inverted by ``-v``."""
    return _passes(path, name, options) != options.has("v")


def _directory_entries(path):
    try:
        with os.scandir(path) as entries:
            names = [entry.name for entry in entries]
    except (OSError, ValueError):
        return None
    return [".", "..", *names]


def select(paths, options, stdin=None):
    """Yield the names that pass; read paths from ``stdin`` if none given."""
    if not paths:
        for line in stdin:
            name = line[:-1] if line.endswith("\n") else line
            if test_path(name, name, options):
                yield name
        return
    for arg in paths:
        entries = _directory_entries(arg) if options.has("l") else None
        if entries is None:
            if test_path(arg, arg, options):
                yield arg
            continue
        for entry in entries:
            full = f"{arg}/{entry}"
            if len(full.encode("utf-8", "surrogateescape")) >= _PATH_MAX:
                continue
            if test_path(full, entry, options):
                yield entry


def main(argv=None):
    """Run the filter; return 0 if anything matched, 1 if not, 2 on misuse."""
    args = sys.argv[1:] if argv is None else argv
    try:
        options, paths = parse_args(args)
    except UsageError:
        print(USAGE.format(prog=PROG), file=sys.stderr)
        return 2
    matched = False
    for name in select(paths, options, sys.stdin):
        if options.has("q"):
            return 0
        matched = True
        print(name)
    return 0 if matched else 1


if __name__ == "__main__":
    sys.exit(main())