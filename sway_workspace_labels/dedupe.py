"""Order-preserving deduplication."""

from typing import Hashable, Iterable, List, Set, TypeVar

T = TypeVar("T", bound=Hashable)


def unique_stable(items: Iterable[T]) -> List[T]:
    """Drop repeated items, keeping the first occurrence of each in order.

    Example:
        ["a", "b", "a", "c", "b"] -> ["a", "b", "c"]
    """
    seen: Set[T] = set()
    out: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out
