"""Record dataclasses for PlantLog.

Records are immutable; the store replaces a record rather than mutating it.
`to_dict` produces the persisted (camelCase) layout and `from_dict` reads
it back, ignoring keys it does not know. Only `id` is required when
reading: data written by older versions may lack other fields (care
records without `timestamp`, for instance), which then read as None and
are left out again when written back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CareType(str, Enum):
    """Kinds of maintenance a care record or reminder refers to."""

    WATER = "water"
    FERTILIZE = "fertilize"
    REPOT = "repot"
    PRUNE = "prune"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def care_type_label(value: str) -> str:
    """Return the display label for a care type, or the raw value if unknown."""
    try:
        return CareType(value).label
    except ValueError:
        return value


def _without_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class Plant:
    """A tracked succulent specimen."""
    id: str
    name: str
    species: str
    acquisition_date: str  # YYYY-MM-DD
    location: str | None = None
    image: str | None = None  # data URL

    def to_dict(self) -> dict[str, Any]:
        return _without_none({
            "id": self.id,
            "name": self.name,
            "species": self.species,
            "acquisitionDate": self.acquisition_date,
            "location": self.location,
            "image": self.image,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Plant:
        return cls(
            id=data["id"],
            name=data.get("name"),
            species=data.get("species"),
            acquisition_date=data.get("acquisitionDate"),
            location=data.get("location"),
            image=data.get("image"),
        )


@dataclass(frozen=True)
class CareRecord:
    """A logged maintenance event for one plant.

    `date` is the user-supplied calendar day of the event; `timestamp` is
    the wall-clock insertion time assigned by the store and never changes.
    """
    id: str
    plant_id: str
    type: str  # CareType value
    date: str  # YYYY-MM-DD
    timestamp: str | None  # ISO 8601 UTC; None for records from older data
    notes: str | None = None
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _without_none({
            "id": self.id,
            "plantId": self.plant_id,
            "type": self.type,
            "date": self.date,
            "notes": self.notes,
            "image": self.image,
            "timestamp": self.timestamp,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CareRecord:
        return cls(
            id=data["id"],
            plant_id=data.get("plantId"),
            type=data.get("type"),
            date=data.get("date"),
            timestamp=data.get("timestamp"),
            notes=data.get("notes"),
            image=data.get("image"),
        )


@dataclass(frozen=True)
class Reminder:
    """A recurring maintenance cue for one plant."""
    id: str
    plant_id: str
    type: str  # CareType value
    interval: int  # days between recurrences
    next_date: str  # YYYY-MM-DD

    def is_due(self, today: str) -> bool:
        """Check whether the reminder is due on `today` (ISO date string)."""
        return self.next_date is not None and self.next_date <= today

    def to_dict(self) -> dict[str, Any]:
        return _without_none({
            "id": self.id,
            "plantId": self.plant_id,
            "type": self.type,
            "interval": self.interval,
            "nextDate": self.next_date,
        })

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reminder:
        return cls(
            id=data["id"],
            plant_id=data.get("plantId"),
            type=data.get("type"),
            interval=data.get("interval"),
            next_date=data.get("nextDate"),
        )
