"""Window-manager state: clients, monitors, focus, tags and gaps."""

import os
import subprocess
import sys

from .errors import format_fatal
from .model import Monitor, Settings, apply_size_hints, intersect

__all__ = ["WindowManager"]

_LTSYMBOL_MAX = 15


class WindowManager:
    """Tiling window manager state over one screen of ``width`` x ``height``.

    Layout arrange functions are called as ``arrange(wm, monitor)`` and
    place clients through ``wm.resize``.
    """

    def __init__(self, width, height, bar_height, settings=None):
        self.settings = settings if settings is not None else Settings()
        self.sw = width
        self.sh = height
        self.bar_height = bar_height
        self.running = True
        self.enablegaps = True
        mon = Monitor.from_settings(self.settings, 0)
        mon.mx = mon.wx = 0
        mon.my = mon.wy = 0
        mon.mw = mon.ww = width
        mon.mh = mon.wh = height
        mon.update_bar_pos(bar_height)
        self.monitors = [mon]
        self.selmon = mon

    # -- helpers -----------------------------------------------------------

    @staticmethod
    def _visible(client):
        return client.mon.is_visible(client)

    def _managed(self, client):
        return any(client in m.clients for m in self.monitors)

    @staticmethod
    def _attach(client):
        client.mon.clients.insert(0, client)

    @staticmethod
    def _attach_stack(client):
        client.mon.stack.insert(0, client)

    @staticmethod
    def _detach(client):
        if client in client.mon.clients:
            client.mon.clients.remove(client)

    def _detach_stack(self, client):
        mon = client.mon
        if client in mon.stack:
            mon.stack.remove(client)
        if client is mon.sel:
            mon.sel = next((t for t in mon.stack if self._visible(t)), None)

    def _resize_client(self, client, x, y, w, h):
        client.oldx, client.x = client.x, x
        client.oldy, client.y = client.y, y
        client.oldw, client.w = client.w, w
        client.oldh, client.h = client.h, h

    def _show_hide(self, mon):
        for client in mon.stack:
            if not self._visible(client):
                continue
            if ((mon.layout.arrange is None or client.isfloating)
                    and not client.isfullscreen):
                self.resize(client, client.x, client.y, client.w, client.h, False)

    def _arrange_monitor(self, mon):
        mon.ltsymbol = mon.layout.symbol[:_LTSYMBOL_MAX]
        if mon.layout.arrange is not None:
            mon.layout.arrange(self, mon)

    # -- clients -----------------------------------------------------------

    def apply_rules(self, client, class_name=None, instance=None):
        """Set tags, floating state and monitor from the configured rules."""
        class_name = class_name if class_name is not None else "broken"
        instance = instance if instance is not None else "broken"
        client.isfloating = False
        client.tags = 0
        for rule in self.settings.rules:
            if rule.matches(class_name, instance, client.title):
                client.isfloating = rule.isfloating
                client.tags |= rule.tags
                mon = next((m for m in self.monitors if m.num == rule.monitor), None)
                if mon is not None:
                    client.mon = mon
        mask = self.settings.tagmask
        client.tags = client.tags & mask or client.mon.tags

    def manage(self, client, class_name=None, instance=None):
        """Start managing ``client``, arrange and focus; return the client."""
        client.oldx = client.x
        client.oldy = client.y
        client.oldw = client.w
        client.oldh = client.h
        client.oldbw = client.bw
        client.bw = 0
        parent = client.transient_for
        if parent is not None and self._managed(parent):
            client.mon = parent.mon
            client.tags = parent.tags
        else:
            client.mon = self.selmon
            self.apply_rules(client, class_name, instance)

        mon = client.mon
        if client.x + client.width > mon.wx + mon.ww:
            client.x = mon.wx + mon.ww - client.width
        if client.y + client.height > mon.wy + mon.wh:
            client.y = mon.wy + mon.wh - client.height
        client.x = max(client.x, mon.wx)
        client.y = max(client.y, mon.wy)
        client.bw = self.settings.borderpx

        if not client.isfloating:
            client.isfloating = client.oldstate = (
                client.transient_for is not None or client.isfixed)
        self._attach(client)
        self._attach_stack(client)
        mon.sel = client
        self.arrange(mon)
        self.focus(None)
        return client

    def unmanage(self, client):
        """Stop managing ``client`` and re-arrange its monitor."""
        mon = client.mon
        self._detach(client)
        self._detach_stack(client)
        self.focus(None)
        self.arrange(mon)

    def resize(self, client, x, y, w, h, interact=False):
        """Apply size hints and move the client if anything changed."""
        x, y, w, h, changed = apply_size_hints(
            client, x, y, w, h, interact, self.sw, self.sh,
            self.bar_height, self.settings.resizehints)
        if changed:
            self._resize_client(client, x, y, w, h)
        return changed

    def arrange(self, monitor=None):
        """Re-layout one monitor, or every monitor if none is given."""
        mons = [monitor] if monitor is not None else list(self.monitors)
        for mon in mons:
            self._show_hide(mon)
        for mon in mons:
            self._arrange_monitor(mon)

    # -- focus -------------------------------------------------------------

    def focus(self, client=None):
        """Focus ``client``, or the most recent visible one."""
        c = client
        if c is None or not self._visible(c):
            c = next((t for t in self.selmon.stack if self._visible(t)), None)
        if c is not None:
            if c.mon is not self.selmon:
                self.selmon = c.mon
            c.isurgent = False
            self._detach_stack(c)
            self._attach_stack(c)
        self.selmon.sel = c

    def focus_stack(self, direction):
        """Focus the next (direction > 0) or previous visible client."""
        mon = self.selmon
        sel = mon.sel
        if sel is None or (sel.isfullscreen and self.settings.lockfullscreen):
            return
        clients = mon.clients
        idx = clients.index(sel)
        visible = [c for c in clients if self._visible(c)]
        if direction > 0:
            after = [c for c in clients[idx + 1:] if self._visible(c)]
            target = after[0] if after else (visible[0] if visible else None)
        else:
            before = [c for c in clients[:idx] if self._visible(c)]
            if before:
                target = before[-1]
            else:
                rest = [c for c in clients[idx:] if self._visible(c)]
                target = rest[-1] if rest else None
        if target is not None:
            self.focus(target)

    # -- tags --------------------------------------------------------------

    def view(self, tags):
        """Show the given tags, or the previous tag set when ``tags`` is 0."""
        mon = self.selmon
        mask = self.settings.tagmask
        if tags & mask == mon.tags:
            return
        mon.seltags ^= 1
        if tags & mask:
            mon.tagset[mon.seltags] = tags & mask
        self.focus(None)
        self.arrange(mon)

    def toggle_view(self, tags):
        """Toggle tags in the view; the view never becomes empty."""
        mon = self.selmon
        newtagset = mon.tags ^ (tags & self.settings.tagmask)
        if newtagset:
            mon.tagset[mon.seltags] = newtagset
            self.focus(None)
            self.arrange(mon)

    def tag(self, tags):
        """Give the selected client exactly these tags."""
        mon = self.selmon
        mask = self.settings.tagmask
        if mon.sel is not None and tags & mask:
            mon.sel.tags = tags & mask
            self.focus(None)
            self.arrange(mon)

    def toggle_tag(self, tags):
        """Toggle tags on the selected client; it always keeps one."""
        mon = self.selmon
        if mon.sel is None:
            return
        newtags = mon.sel.tags ^ (tags & self.settings.tagmask)
        if newtags:
            mon.sel.tags = newtags
            self.focus(None)
            self.arrange(mon)

    # -- layout ------------------------------------------------------------

    def inc_nmaster(self, delta):
        mon = self.selmon
        mon.nmaster = max(mon.nmaster + delta, 0)
        self.arrange(mon)

    def set_mfact(self, value):
        """Add ``value`` to the master factor, or set it to ``value - 1``
        when ``value`` is at least 1.0; results outside [0.05, 0.95] are
        ignored."""
        mon = self.selmon
        if value is None or mon.layout.arrange is None:
            return
        f = value + mon.mfact if value < 1.0 else value - 1.0
        if f < 0.05 or f > 0.95:
            return
        mon.mfact = f
        self.arrange(mon)

    def set_layout(self, layout=None):
        """Select ``layout``, or switch back to the previous one."""
        mon = self.selmon
        if layout is None or layout is not mon.layout:
            mon.sellt ^= 1
        if layout is not None:
            mon.lt[mon.sellt] = layout
        mon.ltsymbol = mon.layout.symbol[:_LTSYMBOL_MAX]
        if mon.sel is not None:
            self.arrange(mon)

    def toggle_floating(self):
        mon = self.selmon
        sel = mon.sel
        if sel is None or sel.isfullscreen:
            return
        sel.isfloating = not sel.isfloating or sel.isfixed
        if sel.isfloating:
            self.resize(sel, sel.x, sel.y, sel.w, sel.h, False)
        self.arrange(mon)

    def toggle_bar(self):
        mon = self.selmon
        mon.showbar = not mon.showbar
        mon.update_bar_pos(self.bar_height)
        self.arrange(mon)

    def zoom(self):
        """Move the selected tiled client to the master area, or swap the
        master with the next tiled client."""
        mon = self.selmon
        c = mon.sel
        if mon.layout.arrange is None or c is None or c.isfloating:
            return
        tiled = mon.tiled()
        if tiled and c is tiled[0]:
            if len(tiled) < 2:
                return
            c = tiled[1]
        self._detach(c)
        self._attach(c)
        self.focus(c)
        self.arrange(c.mon)

    def rect_to_monitor(self, x, y, w, h):
        """The monitor that shares the most area with the rectangle."""
        best = self.selmon
        area = 0
        for mon in self.monitors:
            a = intersect(x, y, w, h, mon)
            if a > area:
                area = a
                best = mon
        return best

    # -- processes and lifetime -------------------------------------------

    def spawn(self, command):
        """Start ``command`` in a new session; return the process or None.

        For menu commands the argument after ``-m`` becomes the number of
        the selected monitor.
        """
        args = list(command)
        if not args:
            raise ValueError("empty command")
        if os.path.basename(args[0]).startswith("dmenu"):
            for pos, arg in enumerate(args[:-1]):
                if arg == "-m":
                    args[pos + 1] = str(self.selmon.num)
        try:
            return subprocess.Popen(args, start_new_session=True, close_fds=True)
        except OSError as err:
            print(format_fatal(f"execvp '{args[0]}' failed:", err), file=sys.stderr)
            return None

    def quit(self):
        self.running = False

    # -- gaps --------------------------------------------------------------

    def set_gaps(self, oh, ov, ih, iv):
        """Set the selected monitor's gaps; negatives become zero."""
        mon = self.selmon
        mon.gappoh = max(oh, 0)
        mon.gappov = max(ov, 0)
        mon.gappih = max(ih, 0)
        mon.gappiv = max(iv, 0)
        self.arrange(mon)

    def inc_gaps(self, delta):
        m = self.selmon
        self.set_gaps(m.gappoh + delta, m.gappov + delta,
                      m.gappih + delta, m.gappiv + delta)

    def inc_inner_gaps(self, delta):
        m = self.selmon
        self.set_gaps(m.gappoh, m.gappov, m.gappih + delta, m.gappiv + delta)

    def inc_outer_gaps(self, delta):
        m = self.selmon
        self.set_gaps(m.gappoh + delta, m.gappov + delta, m.gappih, m.gappiv)

    def toggle_gaps(self):
        self.enablegaps = not self.enablegaps
        self.arrange(None)

    def default_gaps(self):
        s = self.settings
        self.set_gaps(s.gappoh, s.gappov, s.gappih, s.gappiv)