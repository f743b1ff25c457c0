"""
Trip tag service. Tags belong to a user and are applied to trips.
"""
from typing import List

from sqlalchemy.orm import Session

from tripjournal.core.exceptions import NotFoundError, ValidationError
from tripjournal.models.tag import TripTag
from tripjournal.schemas.tag import TagCreate, TagUpdate


def _get_own_tag(db: Session, user_id: int, tag_id: int) -> TripTag:
    tag = db.query(TripTag).filter(TripTag.id == tag_id, TripTag.user_id == user_id).first()
    if not tag:
        raise NotFoundError("Tag not found")
    return tag


def _check_unique_name(db: Session, user_id: int, name: str, exclude_id: int = None) -> None:
    query = db.query(TripTag).filter(TripTag.user_id == user_id, TripTag.name == name)
    if exclude_id is not None:
        query = query.filter(TripTag.id != exclude_id)
    if query.first():
        raise ValidationError(f"Tag '{name}' already exists")


def list_tags(db: Session, user_id: int) -> List[TripTag]:
    return db.query(TripTag).filter(TripTag.user_id == user_id).order_by(TripTag.name).all()


def create_tag(db: Session, user_id: int, data: TagCreate) -> TripTag:
    _check_unique_name(db, user_id, data.name)
    tag = TripTag(user_id=user_id, **data.model_dump())
    db.add(tag)
    db.commit()
    db.refresh(tag)
    return tag


def update_tag(db: Session, user_id: int, tag_id: int, data: TagUpdate) -> TripTag:
    tag = _get_own_tag(db, user_id, tag_id)
    changes = data.model_dump(exclude_unset=True)
    if "name" in changes:
        if changes["name"] is None:
            raise ValidationError("Tag name cannot be empty")
        _check_unique_name(db, user_id, changes["name"], exclude_id=tag.id)

    for field, value in changes.items():
        setattr(tag, field, value)
    db.commit()
    db.refresh(tag)
    return tag


def delete_tag(db: Session, user_id: int, tag_id: int) -> None:
    """Delete a tag and remove it from every trip."""
    tag = _get_own_tag(db, user_id, tag_id)
    db.delete(tag)
    db.commit()
