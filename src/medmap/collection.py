from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from medmap.models import Facility


class FacilityCollection(Sequence[Facility]):
    """Ordered, immutable set of facilities with unique ids."""

    __slots__ = ("_items", "_index")

    def __init__(self, items: Iterable[Facility] = ()) -> None:
        self._items: tuple[Facility, ...] = tuple(items)
        index: dict[int, Facility] = {}
        for item in self._items:
            if item.id in index:
                raise ValueError(f"duplicate facility id: {item.id}")
            index[item.id] = item
        self._index = index

    @overload
    def __getitem__(self, position: int) -> Facility: ...

    @overload
    def __getitem__(self, position: slice) -> FacilityCollection: ...

    def __getitem__(self, position: int | slice) -> Facility | FacilityCollection:
        if isinstance(position, slice):
            return FacilityCollection(self._items[position])
        return self._items[position]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Facility]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FacilityCollection):
            return self._items == other._items
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FacilityCollection({len(self._items)} facilities)"

    def get(self, facility_id: int) -> Facility | None:
        return self._index.get(facility_id)

    def ids(self) -> list[int]:
        return [item.id for item in self._items]

    def to_payload(self) -> list[dict[str, Any]]:
        return [item.to_payload() for item in self._items]


EMPTY_COLLECTION = FacilityCollection()
