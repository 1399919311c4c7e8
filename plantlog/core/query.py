"""Query helpers over in-memory record collections.

QUERY HELPER SCOPE:
Only patterns repeated by more than one store operation live here.
"""

from typing import Iterable, Protocol, TypeVar


class _OwnedByPlant(Protocol):
    plant_id: str


class _Dated(Protocol):
    date: str


T = TypeVar("T", bound=_OwnedByPlant)
D = TypeVar("D", bound=_Dated)


def for_plant(records: Iterable[T], plant_id: str) -> list[T]:
    """Return records whose plant_id equals `plant_id`, in stored order."""
    return [r for r in records if r.plant_id == plant_id]


def excluding_plant(records: Iterable[T], plant_id: str) -> list[T]:
    """Return records not owned by `plant_id`, in stored order."""
    return [r for r in records if r.plant_id != plant_id]


def newest_first(records: Iterable[D]) -> list[D]:
    """Sort records by ISO `date`, most recent first.

    Records sharing a date keep their insertion order: sorted() stays
    stable with reverse=True. Records without a date sort last.

    Examples:
        >>> [r.date for r in newest_first(records)]
        ['2024-03-01', '2024-02-01', '2024-02-01', '2024-01-01']
    """
    return sorted(records, key=lambda r: r.date or "", reverse=True)
