from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, TypeVar

T = TypeVar("T")
U = TypeVar("U")


def indent(it: Iterable[str], depth: int = 2) -> Iterator[str]:
    """Prefix every non-empty line with `depth` spaces.

    Blank lines pass through untouched so separators never pick up trailing
    whitespace, however deep the nesting.
    """
    pad = " " * depth
    for line in it:
        yield pad + line if line != "" else line


def flat_map(it: Iterable[T], f: Callable[[T], U | Iterable[U]]) -> Iterator[U]:
    """Map `f` over `it`, splicing in any results that are iterables.

    Strings count as single items, not as iterables of characters.
    """
    for value in it:
        result = f(value)
        if isinstance(result, Iterable) and not isinstance(result, (str, bytes)):
            yield from result
        else:
            yield result  # type: ignore[misc]


def collect(it: Iterable[T]) -> list[T]:
    return list(it)


def select_map(
    source: Iterable[T],
    select: Callable[[T], str],
    delegates: Mapping[str, Callable[[T], Any]],
) -> dict[str, list[Any]]:
    """Sort items into buckets by `select`, mapping each with its bucket's delegate.

    Every delegate key gets a bucket, even if nothing lands in it. Relative
    order inside a bucket follows `source`.
    """
    result: dict[str, list[Any]] = {k: [] for k in delegates}
    for value in source:
        k = select(value)
        result[k].append(delegates[k](value))
    return result
