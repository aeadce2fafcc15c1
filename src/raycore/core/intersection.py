"""Intersection records and the sorted intersection collection.

An ``Intersection`` is one root of a ray-primitive solve: the ray parameter
``t`` and the identity of the primitive that produced it. ``Intersections``
keeps a sequence of them sorted ascending by ``t`` at all times, so that
selecting the visible hit is a linear scan for the first non-negative entry.

Sorting is stable: entries with equal ``t`` (tangent hits, or two primitives
touching at the same point) keep the order in which they were added.

Example:
    >>> xs = Intersections([Intersection(5.0, 0), Intersection(-3.0, 0), Intersection(2.0, 1)])
    >>> xs.ts()
    [-3.0, 2.0, 5.0]
    >>> xs.hit()
    Intersection(t=2.0, object_id=1)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from operator import attrgetter
from typing import overload

_by_t = attrgetter("t")


@dataclass(frozen=True)
class Intersection:
    """A single ray-primitive intersection.

    Attributes:
        t: The ray parameter. Negative when the surface lies behind the
            ray origin.
        object_id: Identity of the primitive that was hit.
    """

    t: float
    object_id: int


class Intersections(Sequence[Intersection]):
    """An ascending-by-t collection of intersections.

    The collection re-sorts itself after construction and after every
    ``aggregate`` call, so iteration order is always ascending ``t``.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Intersection] = ()) -> None:
        self._items: list[Intersection] = sorted(items, key=_by_t)

    @classmethod
    def empty(cls) -> Intersections:
        return cls()

    @overload
    def __getitem__(self, index: int) -> Intersection: ...

    @overload
    def __getitem__(self, index: slice) -> list[Intersection]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Intersections):
            return self._items == other._items
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Intersections({self._items!r})"

    def ts(self) -> list[float]:
        """Return the t values in collection order."""
        return [x.t for x in self._items]

    def sort(self) -> None:
        """Re-establish ascending order.

        Already sorted collections are left unchanged since the sort is stable.
        """
        self._items.sort(key=_by_t)

    def aggregate(self, *others: Iterable[Intersection]) -> Intersections:
        """Merge other intersections into this collection.

        Entries are appended in argument order and the collection is
        re-sorted, so ties keep this collection's entries first.

        Returns:
            This collection, for chaining.
        """
        for other in others:
            self._items.extend(other)
        self.sort()
        return self

    def __add__(self, other: object) -> Intersections:
        if isinstance(other, Intersections):
            return Intersections(self._items + other._items)
        return NotImplemented

    def hit(self) -> Intersection | None:
        """Return the visible intersection.

        Returns:
            The first intersection with t >= 0 (the smallest non-negative
            parameter), or None if every intersection lies behind the ray.
        """
        for intersection in self._items:
            if intersection.t >= 0.0:
                return intersection
        return None
