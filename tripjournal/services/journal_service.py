"""
Journal entry service.
"""
from sqlalchemy.orm import Session

from tripjournal.core.pagination import Page, paginate_query
from tripjournal.core.utils import reject_nulls
from tripjournal.db.base import utcnow
from tripjournal.models.journal import JournalEntry
from tripjournal.models.location import Location
from tripjournal.schemas.journal import JournalEntryCreate, JournalEntryUpdate
from tripjournal.services.access_service import Access, authorize_trip, authorize_entity, ensure_in_trip


def create_journal_entry(db: Session, user_id: int, data: JournalEntryCreate) -> JournalEntry:
    """Create a journal entry; the date defaults to now."""
    authorize_trip(db, data.trip_id, user_id, Access.WRITE)
    ensure_in_trip(db, Location, data.location_id, data.trip_id, "Location")

    entry = JournalEntry(
        trip_id=data.trip_id,
        location_id=data.location_id,
        title=data.title,
        content=data.content,
        date=data.date or utcnow(),
        entry_type=data.entry_type.value
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_journal_entries(db: Session, user_id: int, trip_id: int, skip: int, take: int) -> Page:
    authorize_trip(db, trip_id, user_id, Access.READ)
    query = db.query(JournalEntry).filter(JournalEntry.trip_id == trip_id).order_by(
        JournalEntry.date.desc(),
        JournalEntry.created_at.desc()
    )
    return paginate_query(query, skip, take)


def get_journal_entry(db: Session, user_id: int, entry_id: int) -> JournalEntry:
    return authorize_entity(db, JournalEntry, entry_id, user_id, Access.READ, "Journal entry")


def update_journal_entry(db: Session, user_id: int, entry_id: int, data: JournalEntryUpdate) -> JournalEntry:
    entry = authorize_entity(db, JournalEntry, entry_id, user_id, Access.WRITE, "Journal entry")
    changes = data.model_dump(exclude_unset=True)
    reject_nulls(changes, "content", "entry_type")
    if changes.get("location_id") is not None:
        ensure_in_trip(db, Location, changes["location_id"], entry.trip_id, "Location")
    if changes.get("entry_type") is not None:
        changes["entry_type"] = changes["entry_type"].value

    for field, value in changes.items():
        setattr(entry, field, value)
    db.commit()
    db.refresh(entry)
    return entry


def delete_journal_entry(db: Session, user_id: int, entry_id: int) -> None:
    entry = authorize_entity(db, JournalEntry, entry_id, user_id, Access.WRITE, "Journal entry")
    db.delete(entry)
    db.commit()
