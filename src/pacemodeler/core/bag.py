"""
PACEModeler Bag

Immutable, append-only multiset over terms. Insertion order is irrelevant
to a bag's identity, duplicates are kept, and nothing is ever removed:
knowledge only grows.

Elements are keyed by the term's own hash/equality, so a Hash inserted in
one orientation is a member in the other.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, Iterator, Mapping, TypeVar

import attrs

T = TypeVar("T")


@attrs.define(frozen=True, slots=True, eq=False)
class Bag(Generic[T]):
    """
    Order-irrelevant, duplicate-preserving collection.

    INVARIANT: every count is positive
    INVARIANT: a bag is never mutated after construction

    Example:
        bag = Bag.empty().insert(r1).insert(r2).insert(r1)
        assert r1 in bag and bag.count(r1) == 2 and len(bag) == 3
    """

    _counts: Mapping[T, int] = attrs.field(factory=dict, alias="_counts")

    @classmethod
    def empty(cls) -> Bag[T]:
        return _EMPTY

    @classmethod
    def of(cls, *elems: T) -> Bag[T]:
        return _EMPTY.insert_all(elems)

    def insert(self, elem: T) -> Bag[T]:
        counts: Dict[T, int] = dict(self._counts)
        counts[elem] = counts.get(elem, 0) + 1
        return Bag(_counts=counts)

    def insert_all(self, elems: Iterable[T]) -> Bag[T]:
        counts: Dict[T, int] = dict(self._counts)
        for elem in elems:
            counts[elem] = counts.get(elem, 0) + 1
        return Bag(_counts=counts)

    def member(self, elem: Any) -> bool:
        try:
            return elem in self._counts
        except TypeError:
            # Unhashable values are never terms
            return False

    def count(self, elem: Any) -> int:
        if not self.member(elem):
            return 0
        return self._counts[elem]

    def distinct(self) -> Iterator[T]:
        """One representative per equivalence class."""
        return iter(self._counts)

    def issubbag(self, other: Bag[T]) -> bool:
        """True if every element of this bag is a member of `other`."""
        return all(other.member(elem) for elem in self._counts)

    def __contains__(self, elem: Any) -> bool:
        return self.member(elem)

    def __iter__(self) -> Iterator[T]:
        for elem, n in self._counts.items():
            for _ in range(n):
                yield elem

    def __len__(self) -> int:
        return sum(self._counts.values())

    def __bool__(self) -> bool:
        return bool(self._counts)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Bag):
            return NotImplemented
        return dict(self._counts) == dict(other._counts)

    def __hash__(self) -> int:
        return hash(frozenset(self._counts.items()))

    def __repr__(self) -> str:
        return f"Bag({', '.join(str(e) for e in self)})"


_EMPTY: Bag[Any] = Bag()


def empty() -> Bag[Any]:
    return _EMPTY


def insert(elem: T, bag: Bag[T]) -> Bag[T]:
    return bag.insert(elem)


def member(elem: Any, bag: Bag[Any]) -> bool:
    return bag.member(elem)
