from __future__ import annotations

from protoemit.lines import collect, flat_map, indent, select_map


def test_indent_skips_blank_lines() -> None:
    assert list(indent(["a", "", "b"])) == ["  a", "", "  b"]
    assert list(indent(["a"], 6)) == ["      a"]


def test_indent_stacks() -> None:
    assert list(indent(indent(["x", ""]))) == ["    x", ""]


def test_indent_is_lazy() -> None:
    def boom():
        yield "ok"
        raise RuntimeError("consumed too far")

    it = indent(boom())
    assert next(it) == "  ok"


def test_flat_map_splices_iterables_and_keeps_strings_whole() -> None:
    out = list(flat_map([1, 2, 3], lambda v: [f"{v}a", f"{v}b"] if v % 2 else f"{v}"))
    assert out == ["1a", "1b", "2", "3a", "3b"]


def test_flat_map_with_generators() -> None:
    def expand(n: int):
        yield from range(n)

    assert list(flat_map([2, 0, 3], expand)) == [0, 1, 0, 1, 2]


def test_collect() -> None:
    assert collect(x for x in "abc") == ["a", "b", "c"]
    assert collect([]) == []


def test_select_map_buckets_preserve_order() -> None:
    out = select_map(
        ["b", 1, "a", 2],
        lambda v: "names" if isinstance(v, str) else "numbers",
        {"numbers": lambda v: v * 10, "names": str.upper},
    )
    assert out == {"numbers": [10, 20], "names": ["B", "A"]}


def test_select_map_always_has_every_bucket() -> None:
    out = select_map([], lambda v: "x", {"x": str, "y": str})
    assert out == {"x": [], "y": []}
