"""Clients, monitors, layouts and the settings they are built from."""

from dataclasses import dataclass, field

__all__ = [
    "SizeHints",
    "Client",
    "Layout",
    "Rule",
    "Settings",
    "Monitor",
    "intersect",
    "apply_size_hints",
]

BROKEN = "broken"
_LTSYMBOL_MAX = 15
_MAX_TAGS = 31


def _fdiv(a, b):
    """Floating division that follows IEEE rules instead of raising."""
    if b:
        return a / b
    if a > 0:
        return float("inf")
    if a < 0:
        return float("-inf")
    return float("nan")


def _cmod(a, b):
    """Remainder with the sign of the dividend, as integer ``%`` in C."""
    r = abs(a) % abs(b)
    return -r if a < 0 else r


@dataclass
class SizeHints:
    """Size constraints a client asks for; zero means "no constraint"."""

    basew: int = 0
    baseh: int = 0
    incw: int = 0
    inch: int = 0
    maxw: int = 0
    maxh: int = 0
    minw: int = 0
    minh: int = 0
    mina: float = 0.0
    maxa: float = 0.0

    @classmethod
    def from_hints(cls, base_size=None, min_size=None, resize_inc=None,
                   max_size=None, aspect=None):
        """Build hints from the optional fields of a normal-hints property.

        Sizes are ``(width, height)`` pairs; ``aspect`` is
        ``((min_x, min_y), (max_x, max_y))``. A missing base size falls
        back to the minimum size and the other way round.
        """
        hints = cls()
        if base_size is not None:
            hints.basew, hints.baseh = base_size
        elif min_size is not None:
            hints.basew, hints.baseh = min_size
        if resize_inc is not None:
            hints.incw, hints.inch = resize_inc
        if max_size is not None:
            hints.maxw, hints.maxh = max_size
        if min_size is not None:
            hints.minw, hints.minh = min_size
        elif base_size is not None:
            hints.minw, hints.minh = base_size
        if aspect is not None:
            (min_x, min_y), (max_x, max_y) = aspect
            hints.mina = _fdiv(min_y, min_x)
            hints.maxa = _fdiv(max_x, max_y)
        return hints

    @property
    def is_fixed(self):
        """True when minimum and maximum size are the same."""
        return bool(self.maxw and self.maxh
                    and self.maxw == self.minw and self.maxh == self.minh)


@dataclass(eq=False)
class Client:
    """A managed window; compared by identity."""

    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    oldx: int = 0
    oldy: int = 0
    oldw: int = 0
    oldh: int = 0
    bw: int = 0
    oldbw: int = 0
    tags: int = 0
    isfloating: bool = False
    isurgent: bool = False
    neverfocus: bool = False
    oldstate: bool = False
    isfullscreen: bool = False
    hints: SizeHints = field(default_factory=SizeHints)
    mon: "Monitor | None" = None
    win: int = 0
    transient_for: "Client | None" = None

    @property
    def isfixed(self):
        return self.hints.is_fixed

    @property
    def width(self):
        """Outer width, borders included."""
        return self.w + 2 * self.bw

    @property
    def height(self):
        """Outer height, borders included."""
        return self.h + 2 * self.bw

    @property
    def title(self):
        """The name to show, or a marker for clients without one."""
        return self.name or BROKEN


@dataclass(frozen=True)
class Layout:
    """A bar symbol and an arrange function; None arranges nothing."""

    symbol: str
    arrange: object = None


@dataclass(frozen=True)
class Rule:
    """Tags, floating state and monitor for windows that match.

    ``None`` in a match field matches anything; a monitor of -1 means no
    preference.
    """

    class_name: str | None = None
    instance: str | None = None
    title: str | None = None
    tags: int = 0
    isfloating: bool = False
    monitor: int = -1

    def matches(self, class_name, instance, title):
        return ((self.title is None or self.title in title)
                and (self.class_name is None or self.class_name in class_name)
                and (self.instance is None or self.instance in instance))


def _default_tags():
    return [str(n) for n in range(1, 10)]


def _default_rules():
    return [
        Rule(class_name="Gimp", tags=0, isfloating=True, monitor=-1),
        Rule(class_name="Firefox", tags=1 << 8, isfloating=False, monitor=-1),
    ]


def _default_layouts():
    return [Layout("><>", None)]


@dataclass
class Settings:
    """Appearance, tagging and layout configuration."""

    borderpx: int = 1
    snap: int = 32
    gappih: int = 20
    gappiv: int = 10
    gappoh: int = 10
    gappov: int = 30
    smartgaps: bool = False
    showbar: bool = True
    topbar: bool = True
    fonts: list = field(default_factory=lambda: ["monospace:size=10"])
    tags: list = field(default_factory=_default_tags)
    rules: list = field(default_factory=_default_rules)
    mfact: float = 0.55
    nmaster: int = 1
    resizehints: bool = True
    lockfullscreen: bool = True
    refreshrate: int = 120
    layouts: list = field(default_factory=_default_layouts)

    def __post_init__(self):
        if len(self.tags) > _MAX_TAGS:
            raise ValueError(f"at most {_MAX_TAGS} tags are supported")
        if not self.layouts:
            raise ValueError("at least one layout is required")

    @property
    def tagmask(self):
        """Bit mask covering every configured tag."""
        return (1 << len(self.tags)) - 1


@dataclass(eq=False)
class Monitor:
    """One screen: its geometry, clients, focus stack and layouts."""

    num: int = 0
    mfact: float = 0.55
    nmaster: int = 1
    mx: int = 0
    my: int = 0
    mw: int = 0
    mh: int = 0
    wx: int = 0
    wy: int = 0
    ww: int = 0
    wh: int = 0
    by: int = 0
    gappih: int = 0
    gappiv: int = 0
    gappoh: int = 0
    gappov: int = 0
    seltags: int = 0
    sellt: int = 0
    tagset: list = field(default_factory=lambda: [1, 1])
    showbar: bool = True
    topbar: bool = True
    clients: list = field(default_factory=list)
    stack: list = field(default_factory=list)
    sel: Client | None = None
    lt: list = field(default_factory=lambda: [Layout("><>", None)] * 2)
    ltsymbol: str = ""

    @classmethod
    def from_settings(cls, settings, num=0):
        """A new monitor with the configured defaults."""
        layouts = settings.layouts
        return cls(
            num=num,
            mfact=settings.mfact,
            nmaster=settings.nmaster,
            gappih=settings.gappih,
            gappiv=settings.gappiv,
            gappoh=settings.gappoh,
            gappov=settings.gappov,
            showbar=settings.showbar,
            topbar=settings.topbar,
            lt=[layouts[0], layouts[1 % len(layouts)]],
            ltsymbol=layouts[0].symbol[:_LTSYMBOL_MAX],
        )

    @property
    def layout(self):
        """The selected layout."""
        return self.lt[self.sellt]

    @property
    def tags(self):
        """The selected tag set."""
        return self.tagset[self.seltags]

    def is_visible(self, client):
        """True if the client carries a tag that is in view."""
        return bool(client.tags & self.tagset[self.seltags])

    def tiled(self):
        """Visible, non-floating clients in list order."""
        return [c for c in self.clients
                if not c.isfloating and self.is_visible(c)]

    def update_bar_pos(self, bar_height):
        """Recompute the window area and bar position."""
        self.wy = self.my
        self.wh = self.mh
        if self.showbar:
            self.wh -= bar_height
            self.by = self.wy if self.topbar else self.wy + self.wh
            self.wy = self.wy + bar_height if self.topbar else self.wy
        else:
            self.by = -bar_height


def intersect(x, y, w, h, monitor):
    """Area shared by a rectangle and a monitor's window area."""
    dx = max(0, min(x + w, monitor.wx + monitor.ww) - max(x, monitor.wx))
    dy = max(0, min(y + h, monitor.wy + monitor.wh) - max(y, monitor.wy))
    return dx * dy


def apply_size_hints(client, x, y, w, h, interact, screen_w, screen_h,
                     bar_height, resize_hints=True):
    """Constrain a proposed geometry; return ``(x, y, w, h, changed)``.

    ``changed`` tells whether the result differs from the client's
    current geometry.
    """
    m = client.mon
    w = max(1, w)
    h = max(1, h)
    border = 2 * client.bw
    if interact:
        if x > screen_w:
            x = screen_w - client.width
        if y > screen_h:
            y = screen_h - client.height
        if x + w + border < 0:
            x = 0
        if y + h + border < 0:
            y = 0
    else:
        if x >= m.wx + m.ww:
            x = m.wx + m.ww - client.width
        if y >= m.wy + m.wh:
            y = m.wy + m.wh - client.height
        if x + w + border <= m.wx:
            x = m.wx
        if y + h + border <= m.wy:
            y = m.wy
    if h < bar_height:
        h = bar_height
    if w < bar_height:
        w = bar_height
    if resize_hints or client.isfloating or m.layout.arrange is None:
        hints = client.hints
        baseismin = hints.basew == hints.minw and hints.baseh == hints.minh
        if not baseismin:
            w -= hints.basew
            h -= hints.baseh
        if hints.mina > 0 and hints.maxa > 0:
            if hints.maxa < _fdiv(w, h):
                w = int(h * hints.maxa + 0.5)
            elif hints.mina < _fdiv(h, w):
                h = int(w * hints.mina + 0.5)
        if baseismin:
            w -= hints.basew
            h -= hints.baseh
        if hints.incw:
            w -= _cmod(w, hints.incw)
        if hints.inch:
            h -= _cmod(h, hints.inch)
        w = max(w + hints.basew, hints.minw)
        h = max(h + hints.baseh, hints.minh)
        if hints.maxw:
            w = min(w, hints.maxw)
        if hints.maxh:
            h = min(h, hints.maxh)
    changed = (x, y, w, h) != (client.x, client.y, client.w, client.h)
    return x, y, w, h, changed