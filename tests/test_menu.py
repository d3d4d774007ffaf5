from dataclasses import dataclass

from folio.menu import Menu, MenuBranch, MenuLeaf, parse_menu


@dataclass(frozen=True)
class FakePage:
    path: str


def lookup_from(*paths):
    known = {path: FakePage(path) for path in paths}

    def lookup(path):
        return known.get(path.strip("/"))

    return lookup


NESTED = "a\n  b\n    c\n    d\ne\n  f\n"


def test_top_level_items():
    menu = Menu.parse(NESTED, lookup_from(*"abcdef"))
    assert menu.top_level() == [FakePage("a"), FakePage("e")]
    assert len(menu) == 2


def test_full_tree():
    a, b, c, d, e, f = (FakePage(name) for name in "abcdef")
    menu = Menu.parse(NESTED, lookup_from(*"abcdef"))
    assert menu.full_menu() == (
        MenuBranch(a, (MenuBranch(b, (MenuLeaf(c), MenuLeaf(d))),)),
        MenuBranch(e, (MenuLeaf(f),)),
    )


def test_for_path_returns_children_anywhere_in_tree():
    menu = Menu.parse(NESTED, lookup_from(*"abcdef"))
    assert menu.for_path("b") == (MenuLeaf(FakePage("c")), MenuLeaf(FakePage("d")))
    assert menu.for_path("/e") == (MenuLeaf(FakePage("f")),)
    assert menu.for_path("c") == ()


def test_for_path_not_in_menu():
    menu = Menu.parse(NESTED, lookup_from(*"abcdef"))
    assert menu.for_path("wibble") is None


def test_for_root_path_returns_full_menu():
    menu = Menu.parse("a\n", lookup_from("a"))
    assert menu.for_path("/") == (MenuLeaf(FakePage("a")),)
    assert menu.for_path("") == menu.full_menu()


def test_blank_input_gives_empty_menu():
    for text in ["", "\n\n", "   \n\t\n"]:
        menu = Menu.parse(text, lookup_from("a"))
        assert menu.full_menu() == ()
        assert menu.top_level() == []


def test_blank_lines_are_ignored():
    menu = Menu.parse("a\n\n  b\n\n\nc\n", lookup_from("a", "b", "c"))
    assert [node.page.path for node in menu] == ["a", "c"]
    assert menu.for_path("a") == (MenuLeaf(FakePage("b")),)


def test_unresolvable_lines_are_skipped():
    menu = Menu.parse("a\nno-such-page\nb\n", lookup_from("a", "b"))
    assert menu.top_level() == [FakePage("a"), FakePage("b")]


def test_children_of_unresolvable_line_move_up():
    nodes = parse_menu("a\n  missing\n    b\n", lookup_from("a", "b"))
    assert nodes == (MenuBranch(FakePage("a"), (MenuLeaf(FakePage("b")),)),)


def test_any_consistent_indent_unit():
    text = "a\n\tb\n\t\tc\nd\n"
    menu = Menu.parse(text, lookup_from("a", "b", "c", "d"))
    assert menu.for_path("a") == (MenuBranch(FakePage("b"), (MenuLeaf(FakePage("c")),)),)
    assert menu.top_level() == [FakePage("a"), FakePage("d")]


def test_dedent_to_intermediate_level():
    text = "a\n  b\n    c\n  d\n"
    menu = Menu.parse(text, lookup_from(*"abcd"))
    assert [node.page.path for node in menu.for_path("a")] == ["b", "d"]


def test_leaf_children_are_empty():
    assert MenuLeaf(FakePage("a")).children == ()
