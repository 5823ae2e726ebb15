import io

import pytest

from tilekit.errors import FatalError
from tilekit.menu import (
    BUFSIZ,
    Item,
    Key,
    Menu,
    MenuOptions,
    Outcome,
    cistrstr,
    match_items,
    parse_args,
    read_items,
)


def width10(text):
    return 10 * len(text)


def make_menu(texts, lines=0, width=600, **kwargs):
    options = MenuOptions(lines=lines, **kwargs)
    return Menu([Item(t) for t in texts], options, width10, width, 22)


def texts(items):
    return [item.text for item in items]


def test_cistrstr_finds_ignoring_case():
    assert cistrstr("Hello World", "WORLD") == 6
    assert cistrstr("abc", "") == 0
    assert cistrstr("abc", "xyz") is None


def test_match_order_exact_prefix_substring():
    items = [Item(t) for t in ["barfoo", "foobar", "foo", "xfoo", "bar"]]
    assert texts(match_items(items, "foo")) == ["foo", "foobar", "barfoo", "xfoo"]


def test_match_all_tokens_required():
    items = [Item(t) for t in ["alpha beta", "alpha", "beta gamma"]]
    assert texts(match_items(items, "beta alpha")) == ["alpha beta"]


def test_empty_or_blank_text_matches_everything_in_order():
    items = [Item(t) for t in ["b", "a", "c"]]
    assert texts(match_items(items, "")) == ["b", "a", "c"]
    assert texts(match_items(items, "   ")) == ["b", "a", "c"]


def test_case_sensitivity():
    items = [Item(t) for t in ["Firefox", "fire"]]
    assert texts(match_items(items, "FIRE")) == []
    assert texts(match_items(items, "FIRE", True)) == ["fire", "Firefox"]


def test_read_items_strips_newlines():
    items = read_items(io.StringIO("one\ntwo\nthree"))
    assert texts(items) == ["one", "two", "three"]
    assert not any(item.out for item in items)


def test_parse_args_options():
    opts = parse_args(["-b", "-i", "-l", "5", "-p", "run:", "-nb", "#000000", "-sf", "#ffffff"])
    assert opts.topbar is False
    assert opts.case_insensitive is True
    assert opts.lines == 5
    assert opts.prompt == "run:"
    assert opts.colors["norm"][1] == "#000000"
    assert opts.colors["sel"][0] == "#ffffff"


def test_parse_args_defaults_and_version():
    opts = parse_args([])
    assert opts.colors["norm"] == ["#bbbbbb", "#222222"]
    assert opts.font == "monospace:size=10"
    assert parse_args(["-v", "-zz"]).show_version is True


@pytest.mark.parametrize("argv", [["-l"], ["-zz", "x"], ["-x"]])
def test_parse_args_usage_errors(argv):
    with pytest.raises(FatalError) as info:
        parse_args(argv)
    assert info.value.message.startswith("usage:")


def test_insert_and_delete_roundtrip():
    menu = make_menu(["apple", "banana"])
    menu.insert("ban")
    assert menu.text == "ban"
    assert menu.cursor == 3
    assert texts(menu.matches) == ["banana"]
    assert menu.delete_back() is True
    assert menu.text == "ba"
    menu.cursor = 0
    assert menu.delete_forward() is True
    assert menu.text == "a"
    assert texts(menu.matches) == ["apple", "banana"]


def test_delete_at_edges_returns_false():
    menu = make_menu(["x"])
    assert menu.delete_back() is False
    assert menu.delete_forward() is False


def test_insert_overflow_is_ignored():
    menu = make_menu(["x"])
    menu.insert("a" * BUFSIZ)
    assert menu.text == ""
    menu.insert("a" * (BUFSIZ - 1))
    assert len(menu.text) == BUFSIZ - 1


def test_kill_to_end():
    menu = make_menu(["x"])
    menu.insert("hello")
    menu.cursor = 2
    menu.kill_to_end()
    assert menu.text == "he"


def test_return_prints_selection_and_exits():
    menu = make_menu(["foo", "bar"])
    assert menu.keypress(Key.RETURN) == Outcome(output="foo", exit_status=0, redraw=False)


def test_shift_return_prints_typed_text():
    menu = make_menu(["foobar"])
    menu.insert("foo")
    outcome = menu.keypress(Key.RETURN, shift=True)
    assert outcome.output == "foo"
    assert outcome.exit_status == 0


def test_ctrl_return_marks_item_and_continues():
    menu = make_menu(["foo", "bar"])
    outcome = menu.keypress(Key.RETURN, ctrl=True)
    assert outcome.output == "foo"
    assert outcome.exit_status is None
    assert menu.matches[0].out is True


def test_ctrl_j_behaves_like_plain_return():
    menu = make_menu(["foo"])
    assert menu.keypress("j", "\n", ctrl=True).exit_status == 0


def test_escape_and_ctrl_c_exit_with_failure():
    menu = make_menu(["foo"])
    assert menu.keypress(Key.ESCAPE).exit_status == 1
    assert menu.keypress("c", ctrl=True).exit_status == 1
    assert menu.keypress("[", ctrl=True).exit_status == 1


def test_ctrl_y_requests_paste():
    menu = make_menu(["foo"])
    assert menu.keypress("y", ctrl=True).paste == "primary"
    assert menu.keypress("Y", ctrl=True, shift=True).paste == "clipboard"


def test_typed_characters_insert_but_control_does_not():
    menu = make_menu(["foo"])
    menu.keypress("f", "f")
    menu.keypress(None, "oo")
    assert menu.text == "foo"
    menu.keypress("x", "\x01")
    assert menu.text == "foo"


def test_tab_completes_selection():
    menu = make_menu(["alpha", "beta"])
    menu.insert("be")
    menu.keypress(Key.TAB)
    assert menu.text == "beta"
    assert menu.cursor == len("beta")


def test_down_and_up_move_selection():
    menu = make_menu(["a", "b", "c"], lines=3)
    menu.keypress(Key.DOWN)
    assert menu.selection.text == "b"
    menu.keypress("p", ctrl=True)
    assert menu.selection.text == "a"
    assert menu.keypress(Key.UP).redraw is True
    assert menu.selection.text == "a"


def test_vertical_paging():
    menu = make_menu(["a", "b", "c", "d", "e"], lines=2)
    assert texts(menu.visible()) == ["a", "b"]
    menu.keypress(Key.NEXT)
    assert texts(menu.visible()) == ["c", "d"]
    assert menu.selection.text == "c"
    menu.keypress(Key.PRIOR)
    assert texts(menu.visible()) == ["a", "b"]


def test_down_past_page_scrolls():
    menu = make_menu(["a", "b", "c", "d", "e"], lines=2)
    menu.keypress(Key.DOWN)
    menu.keypress(Key.DOWN)
    assert menu.selection.text == "c"
    assert menu.visible()[0].text == "c"


def test_end_and_home():
    menu = make_menu(["a", "b", "c", "d", "e"], lines=2)
    menu.keypress(Key.END)
    assert menu.selection.text == "e"
    assert menu.visible()[-1].text == "e"
    menu.keypress(Key.HOME)
    assert menu.selection.text == "a"
    assert menu.visible()[0].text == "a"


def test_end_moves_cursor_first_when_inside_text():
    menu = make_menu(["abc"])
    menu.insert("ab")
    menu.cursor = 0
    menu.keypress("e", ctrl=True)
    assert menu.cursor == 2


def test_lines_limited_by_item_count():
    menu = make_menu(["a", "b"], lines=10)
    assert menu.lines == 2
    assert menu.height == 3 * 22


def test_horizontal_page_contains_selection():
    menu = make_menu(["item%d" % n for n in range(30)], width=400)
    shown = menu.visible()
    assert shown
    assert shown[0] is menu.selection
    assert len(shown) < len(menu.matches)
    menu.keypress(Key.NEXT)
    assert menu.visible()[0] is menu.selection
    assert menu.visible()[0] not in shown


def test_paste_stops_at_newline():
    menu = make_menu(["x"])
    menu.paste("first\nsecond")
    assert menu.text == "first"


def test_no_matches_leaves_nothing_selected():
    menu = make_menu(["abc"])
    menu.insert("zzz")
    assert menu.selection is None
    assert menu.visible() == []
    assert menu.keypress(Key.RETURN).output == "zzz"
    assert menu.keypress(Key.TAB).redraw is False