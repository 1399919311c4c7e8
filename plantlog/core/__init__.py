"""Record store for PlantLog.

RecordStore owns three persisted collections (plants, care records,
reminders) and keeps the persisted entries in step with memory after
every mutation.

ARCHITECTURE:
- The store is constructed explicitly and passed to whatever uses it;
  there is no module-level instance
- The persistence medium is any object with get(key) / set(key, value)
- The clock is injectable so timestamps and "today" are testable
- Reads hand out immutable records in fresh lists, never the internal lists

PERSISTED LAYOUT:
Entries 'plants', 'careRecords' and 'reminders', each a JSON array of
records in camelCase form (see records.py).

ID GENERATION POLICY:
All record IDs are UUID4 strings generated by the store, regenerated on
collision with an existing ID of the same collection. IDs are never reused.

MUTATION ORDER:
A mutation builds the new collection, persists it, and only then swaps it
in. If the medium raises StorageFailure the in-memory state is unchanged.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Callable, NamedTuple

from ..exceptions import MalformedImport, StorageFailure
from ..host.time import now_utc
from . import query
from .records import CareRecord, Plant, Reminder, care_type_label
from .types import Date, Timestamp

if TYPE_CHECKING:
    from ..config import Settings
    from ..storage import KeyValueStore

logger = logging.getLogger(__name__)

PLANTS_KEY = "plants"
CARE_RECORDS_KEY = "careRecords"
REMINDERS_KEY = "reminders"

EXPORT_VERSION = "1.0"

UNKNOWN_PLANT_NAME = "Unknown plant"

# Marks an update_plant() call that leaves the image alone
_KEEP = object()


class ReminderNotice(NamedTuple):
    """A due reminder paired with display text for it."""
    plant_name: str
    care_label: str
    reminder: Reminder


class RecordStore:
    """Sole authority over the plants, care records and reminders collections."""

    def __init__(
        self,
        medium: "KeyValueStore",
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize an empty store.

        Args:
            medium: Persistence medium with get(key) / set(key, value)
            clock: Returns the current time; defaults to UTC now

        Note:
            Call initialize() to load previously persisted collections.
        """
        self._medium = medium
        self._clock = clock or now_utc
        self._plants: list[Plant] = []
        self._care_records: list[CareRecord] = []
        self._reminders: list[Reminder] = []

    # ==========================================================================
    # PERSISTENCE
    # ==========================================================================

    def initialize(self) -> None:
        """Load all three collections from the medium.

        A missing entry yields an empty collection.

        Raises:
            StorageFailure: If the medium fails, an entry is not a JSON
                array, or an element is not an object with an "id"
        """
        self._plants = self._load(PLANTS_KEY, Plant)
        self._care_records = self._load(CARE_RECORDS_KEY, CareRecord)
        self._reminders = self._load(REMINDERS_KEY, Reminder)
        logger.debug(
            "Loaded %d plants, %d care records, %d reminders",
            len(self._plants), len(self._care_records), len(self._reminders)
        )

    def _load(self, key: str, record_type: type) -> list:
        raw = self._medium.get(key)
        if raw is None:
            return []

        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageFailure(f"Persisted '{key}' is not valid JSON: {e}", key=key) from e

        if not isinstance(items, list):
            raise StorageFailure(f"Persisted '{key}' is not an array", key=key)

        try:
            return [record_type.from_dict(item) for item in items]
        except (KeyError, TypeError) as e:
            raise StorageFailure(
                f"Persisted '{key}' holds an element that is not a record object: {e!r}",
                key=key
            ) from e

    def _save(self, key: str, records: list) -> None:
        self._medium.set(
            key,
            json.dumps([r.to_dict() for r in records], ensure_ascii=False)
        )

    def _set_plants(self, plants: list[Plant]) -> None:
        self._save(PLANTS_KEY, plants)
        self._plants = plants

    def _set_care_records(self, records: list[CareRecord]) -> None:
        self._save(CARE_RECORDS_KEY, records)
        self._care_records = records

    def _set_reminders(self, reminders: list[Reminder]) -> None:
        self._save(REMINDERS_KEY, reminders)
        self._reminders = reminders

    def _new_id(self, existing: list) -> str:
        taken = {r.id for r in existing}
        max_retries = 3
        for _ in range(max_retries):
            record_id = str(uuid.uuid4())
            if record_id not in taken:
                return record_id

        # Should never reach here
        raise RuntimeError("Failed to generate unique UUID after retries")

    def _today(self) -> Date:
        return Date.from_date(self._clock())

    # ==========================================================================
    # PLANTS
    # ==========================================================================

    def plants(self) -> list[Plant]:
        """Return all plants in insertion order."""
        return list(self._plants)

    def get_plant(self, plant_id: str) -> Plant | None:
        """Get plant by ID, or None if it doesn't exist."""
        for plant in self._plants:
            if plant.id == plant_id:
                return plant
        return None

    def add_plant(
        self,
        name: str,
        species: str,
        acquisition_date: str,
        location: str | None = None,
        image: str | None = None,
    ) -> Plant:
        """Create a plant with a generated ID.

        Field values are stored as given.

        Args:
            name: Display name
            species: Species or cultivar
            acquisition_date: ISO date the plant was acquired
            location: Optional placement description
            image: Optional image as a data URL

        Returns:
            The created Plant

        Raises:
            StorageFailure: If the plants entry cannot be written
        """
        plant = Plant(
            id=self._new_id(self._plants),
            name=name,
            species=species,
            acquisition_date=acquisition_date,
            location=location,
            image=image,
        )
        self._set_plants([*self._plants, plant])
        logger.debug("Added plant %s (%s)", plant.id, plant.name)
        return plant

    def update_plant(
        self,
        plant_id: str,
        *,
        name: str,
        species: str,
        acquisition_date: str,
        location: str | None = None,
        image: Any = _KEEP,
    ) -> Plant | None:
        """Replace a plant's fields.

        Omitting `image` keeps the stored image. Passing None or "" clears
        it; any other value replaces it.

        Returns:
            The updated Plant, or None if plant_id doesn't exist (nothing
            is written in that case)

        Raises:
            StorageFailure: If the plants entry cannot be written
        """
        for index, current in enumerate(self._plants):
            if current.id == plant_id:
                break
        else:
            logger.info("Update skipped: plant %s not found", plant_id)
            return None

        if image is _KEEP:
            image = current.image
        elif image == "":
            image = None

        updated = Plant(
            id=plant_id,
            name=name,
            species=species,
            acquisition_date=acquisition_date,
            location=location,
            image=image,
        )
        plants = list(self._plants)
        plants[index] = updated
        self._set_plants(plants)
        logger.debug("Updated plant %s", plant_id)
        return updated

    def delete_plant(self, plant_id: str) -> None:
        """Delete a plant together with its care records and reminders.

        All three entries are written, even when plant_id doesn't exist.
        """
        self._set_plants([p for p in self._plants if p.id != plant_id])
        self._set_care_records(query.excluding_plant(self._care_records, plant_id))
        self._set_reminders(query.excluding_plant(self._reminders, plant_id))
        logger.debug("Deleted plant %s and its dependent records", plant_id)

    # ==========================================================================
    # CARE RECORDS
    # ==========================================================================

    def care_records(self) -> list[CareRecord]:
        """Return all care records in insertion order."""
        return list(self._care_records)

    def add_care_record(
        self,
        plant_id: str,
        type: str,
        date: str,
        notes: str | None = None,
        image: str | None = None,
    ) -> CareRecord:
        """Log a care event, stamping it with the current time.

        Args:
            plant_id: Owning plant ID (should reference an existing plant)
            type: Care type value (water, fertilize, repot, prune)
            date: ISO date the care happened
            notes: Optional free text
            image: Optional image as a data URL

        Returns:
            The created CareRecord

        Raises:
            StorageFailure: If the careRecords entry cannot be written
        """
        record = CareRecord(
            id=self._new_id(self._care_records),
            plant_id=plant_id,
            type=type,
            date=date,
            timestamp=Timestamp.from_datetime(self._clock()),
            notes=notes,
            image=image,
        )
        self._set_care_records([*self._care_records, record])
        logger.debug("Added %s record %s for plant %s", type, record.id, plant_id)
        return record

    def care_records_for_plant(self, plant_id: str) -> list[CareRecord]:
        """Return a plant's care records, most recent date first.

        Records on the same date keep insertion order.
        """
        return query.newest_first(query.for_plant(self._care_records, plant_id))

    # ==========================================================================
    # REMINDERS
    # ==========================================================================

    def reminders(self) -> list[Reminder]:
        """Return all reminders in insertion order."""
        return list(self._reminders)

    def get_reminder(self, reminder_id: str) -> Reminder | None:
        """Get reminder by ID, or None if it doesn't exist."""
        for reminder in self._reminders:
            if reminder.id == reminder_id:
                return reminder
        return None

    def add_reminder(
        self,
        plant_id: str,
        type: str,
        interval: int,
        next_date: str,
    ) -> Reminder:
        """Schedule a recurring reminder.

        Args:
            plant_id: Owning plant ID
            type: Care type value
            interval: Days between recurrences
            next_date: ISO date the reminder is next due

        Returns:
            The created Reminder

        Raises:
            StorageFailure: If the reminders entry cannot be written
        """
        reminder = Reminder(
            id=self._new_id(self._reminders),
            plant_id=plant_id,
            type=type,
            interval=interval,
            next_date=next_date,
        )
        self._set_reminders([*self._reminders, reminder])
        logger.debug("Added %s reminder %s for plant %s", type, reminder.id, plant_id)
        return reminder

    def reminders_for_plant(self, plant_id: str) -> list[Reminder]:
        """Return a plant's reminders (no particular order)."""
        return query.for_plant(self._reminders, plant_id)

    def due_reminders(self, today: date | str | None = None) -> list[Reminder]:
        """Return reminders whose next date is on or before `today`.

        Args:
            today: Reference date (date or ISO string); defaults to the
                clock's current date
        """
        today = self._today() if today is None else Date.coerce(today)
        return [r for r in self._reminders if r.is_due(today)]

    def due_reminder_notices(self, today: date | str | None = None) -> list[ReminderNotice]:
        """Return due reminders with their plant name and care label.

        Reminders whose plant no longer exists are named UNKNOWN_PLANT_NAME.
        """
        names = {p.id: p.name for p in self._plants}
        return [
            ReminderNotice(
                plant_name=names.get(r.plant_id) or UNKNOWN_PLANT_NAME,
                care_label=care_type_label(r.type),
                reminder=r,
            )
            for r in self.due_reminders(today)
        ]

    def delete_reminder(self, reminder_id: str) -> None:
        """Delete a reminder; unknown IDs are ignored."""
        self._set_reminders([r for r in self._reminders if r.id != reminder_id])

    def reschedule_reminder(self, reminder_id: str, next_date: str) -> Reminder | None:
        """Set a reminder's next due date.

        Returns:
            The updated Reminder, or None if reminder_id doesn't exist

        Raises:
            StorageFailure: If the reminders entry cannot be written
        """
        for index, current in enumerate(self._reminders):
            if current.id == reminder_id:
                break
        else:
            logger.info("Reschedule skipped: reminder %s not found", reminder_id)
            return None

        updated = replace(current, next_date=next_date)
        reminders = list(self._reminders)
        reminders[index] = updated
        self._set_reminders(reminders)
        logger.debug("Rescheduled reminder %s to %s", reminder_id, next_date)
        return updated

    # ==========================================================================
    # EXPORT / IMPORT
    # ==========================================================================

    def export_all(self) -> dict[str, Any]:
        """Build an export snapshot.

        The snapshot carries plants and care records only; reminders are
        not exported.

        Returns:
            {"plants": [...], "careRecords": [...], "exportDate": ISO-8601,
             "version": "1.0"}
        """
        return {
            PLANTS_KEY: [p.to_dict() for p in self._plants],
            CARE_RECORDS_KEY: [r.to_dict() for r in self._care_records],
            "exportDate": Timestamp.from_datetime(self._clock()),
            "version": EXPORT_VERSION,
        }

    def import_all(self, snapshot: dict[str, Any]) -> list[str]:
        """Replace collections with those found in a snapshot.

        Each of 'plants', 'careRecords' and 'reminders' that is present and
        is a list replaces the corresponding collection and is persisted.
        Records missing fields other than "id" are accepted as they are.
        A collection that is not a list, or that holds an element which is
        not an object with an "id", is left untouched. Collections are
        replaced one at a time; a bad later collection does not undo an
        earlier replacement.

        Args:
            snapshot: Decoded export document; unknown keys are ignored

        Returns:
            Names of the collections that were replaced, in the order above

        Raises:
            MalformedImport: If snapshot is not a JSON object (dict)
            StorageFailure: If a replaced collection cannot be written
        """
        if not isinstance(snapshot, dict):
            raise MalformedImport(
                "Import payload must be a JSON object",
                {"type": type(snapshot).__name__}
            )

        replaced = []
        for key, record_type, setter in (
            (PLANTS_KEY, Plant, self._set_plants),
            (CARE_RECORDS_KEY, CareRecord, self._set_care_records),
            (REMINDERS_KEY, Reminder, self._set_reminders),
        ):
            items = snapshot.get(key)
            if items is None:
                continue
            if not isinstance(items, list):
                logger.warning("Import skipped '%s': expected an array", key)
                continue
            try:
                records = [record_type.from_dict(item) for item in items]
            except (KeyError, TypeError) as e:
                logger.warning("Import skipped '%s': element is not a record object (%r)", key, e)
                continue
            setter(records)
            replaced.append(key)

        logger.info("Imported collections: %s", ", ".join(replaced) or "none")
        return replaced


def open_store(settings: "Settings | None" = None) -> RecordStore:
    """Open the SQLite-backed record store described by settings.

    Also configures the package logger at settings.log_level.

    Args:
        settings: Settings to use; loaded from the environment and config
            file when omitted

    Returns:
        An initialized RecordStore

    Raises:
        StorageFailure: If the database cannot be opened or read
        ValueError: If settings.log_level is not a logging level name
    """
    from ..config import Settings
    from ..logs import configure_logging
    from ..storage import SqliteKeyValueStore

    if settings is None:
        settings = Settings()

    configure_logging(settings.log_level)
    store = RecordStore(SqliteKeyValueStore(settings.database_path))
    store.initialize()
    return store
