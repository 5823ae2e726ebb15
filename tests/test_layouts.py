import itertools

import pytest

from tilekit import layouts
from tilekit.model import Client, Layout, Settings
from tilekit.wm import WindowManager

WIDTH = 1000
HEIGHT = 820
BAR = 20


def make_wm(arrange, count, gaps=0, smartgaps=False, nmaster=1):
    settings = Settings(
        gappih=gaps,
        gappiv=gaps,
        gappoh=gaps,
        gappov=gaps,
        smartgaps=smartgaps,
        nmaster=nmaster,
        layouts=[Layout("T", arrange), Layout("><>", None)],
    )
    wm = WindowManager(WIDTH, HEIGHT, BAR, settings)
    for _ in range(count):
        wm.manage(Client(w=50, h=50))
    return wm, wm.selmon


def outer(c):
    return c.x, c.y, c.width, c.height


def overlap(a, b):
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    dx = max(0, min(ax + aw, bx + bw) - max(ax, bx))
    dy = max(0, min(ay + ah, by + bh) - max(ay, by))
    return dx * dy


TILING = [
    (layouts.tile, 3),
    (layouts.bstack, 3),
    (layouts.bstackhoriz, 3),
    (layouts.centeredmaster, 3),
    (layouts.grid, 4),
    (layouts.gaplessgrid, 4),
    (layouts.horizgrid, 4),
    (layouts.nrowgrid, 4),
    (layouts.dwindle, 3),
    (layouts.spiral, 3),
]


@pytest.mark.parametrize("arrange,count", TILING)
def test_tiling_layouts_cover_window_area_exactly(arrange, count):
    wm, mon = make_wm(arrange, count)
    rects = [outer(c) for c in mon.tiled()]
    assert len(rects) == count
    for x, y, w, h in rects:
        assert x >= mon.wx and y >= mon.wy
        assert x + w <= mon.wx + mon.ww
        assert y + h <= mon.wy + mon.wh
    for a, b in itertools.combinations(rects, 2):
        assert overlap(a, b) == 0
    assert sum(w * h for _, _, w, h in rects) == mon.ww * mon.wh


def test_get_gaps_reports_monitor_gaps_and_count():
    wm, mon = make_wm(layouts.tile, 2, gaps=7)
    assert layouts.get_gaps(wm, mon) == (7, 7, 7, 7, 2)


def test_get_gaps_zero_when_disabled():
    wm, mon = make_wm(layouts.tile, 2, gaps=7)
    wm.toggle_gaps()
    assert layouts.get_gaps(wm, mon) == (0, 0, 0, 0, 2)


def test_smart_gaps_drop_outer_gaps_for_single_client():
    wm, mon = make_wm(layouts.tile, 1, gaps=7, smartgaps=True)
    assert layouts.get_gaps(wm, mon) == (0, 0, 7, 7, 1)
    (c,) = mon.tiled()
    assert outer(c) == (mon.wx, mon.wy, mon.ww, mon.wh)


def test_tile_respects_outer_and_inner_gaps():
    wm, mon = make_wm(layouts.tile, 2, gaps=12)
    master, stack = mon.tiled()
    assert master.x == mon.wx + 12
    assert master.y == mon.wy + 12
    assert stack.x == master.x + master.width + 12
    assert stack.x + stack.width == mon.wx + mon.ww - 12


def test_tile_masters_share_left_column():
    wm, mon = make_wm(layouts.tile, 3, nmaster=2)
    first, second, stack = mon.tiled()
    assert first.x == second.x == mon.wx
    assert first.width == second.width
    assert second.y == first.y + first.height
    assert stack.x == first.x + first.width


def test_monocle_sets_symbol_and_stacks_clients():
    wm, mon = make_wm(layouts.monocle, 3)
    assert mon.ltsymbol == "[3]"
    rects = {outer(c) for c in mon.tiled()}
    assert rects == {(mon.wx, mon.wy, mon.ww, mon.wh)}


def test_deck_symbol_and_shared_stack_area():
    wm, mon = make_wm(layouts.deck, 3)
    assert mon.ltsymbol == "D 2"
    master, *stack = mon.tiled()
    assert outer(stack[0]) == outer(stack[1])
    assert stack[0].x == master.x + master.width


def test_gaplessgrid_five_clients_split_two_and_three():
    wm, mon = make_wm(layouts.gaplessgrid, 5)
    columns = {}
    for c in mon.tiled():
        columns.setdefault(c.x, []).append(c)
    assert sorted(len(v) for v in columns.values()) == [2, 3]


def test_grid_four_clients_form_square():
    wm, mon = make_wm(layouts.grid, 4)
    xs = {c.x for c in mon.tiled()}
    ys = {c.y for c in mon.tiled()}
    assert len(xs) == 2
    assert len(ys) == 2


def test_nrowgrid_two_clients_split_vertically():
    wm, mon = make_wm(layouts.nrowgrid, 2)
    a, b = mon.tiled()
    assert a.y == b.y == mon.wy
    assert a.height == b.height == mon.wh
    assert b.x == a.x + a.width


def test_centeredfloatingmaster_centres_master():
    wm, mon = make_wm(layouts.centeredfloatingmaster, 3)
    master = mon.tiled()[0]
    left_margin = master.x - mon.wx
    right_margin = mon.wx + mon.ww - (master.x + master.width)
    assert abs(left_margin - right_margin) <= 1
    assert master.width < mon.ww


def test_centeredmaster_puts_master_between_stacks():
    wm, mon = make_wm(layouts.centeredmaster, 3)
    master, right, left = mon.tiled()
    assert left.x == mon.wx
    assert master.x == left.x + left.width
    assert right.x == master.x + master.width


def test_dwindle_first_client_takes_master_share():
    wm, mon = make_wm(layouts.dwindle, 2)
    first, second = mon.tiled()
    assert first.x == mon.wx
    assert first.height == mon.wh
    assert second.x == first.x + first.width
    assert first.width > second.width


def test_layout_ignores_floating_clients():
    wm, mon = make_wm(layouts.tile, 2)
    floating = mon.tiled()[0]
    wm.toggle_floating()
    assert floating.isfloating
    (remaining,) = mon.tiled()
    assert outer(remaining) == (mon.wx, mon.wy, mon.ww, mon.wh)


def test_empty_monitor_counts_no_clients():
    wm, mon = make_wm(layouts.tile, 0)
    layouts.tile(wm, mon)
    assert layouts.get_gaps(wm, mon)[4] == 0
    assert mon.tiled() == []