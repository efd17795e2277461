"""Create and rename uniquely named entities (categories and tags)."""

import logging
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.category import Category
from src.models.tag import Tag

logger = logging.getLogger(__name__)

NamedModel = TypeVar("NamedModel", Category, Tag)


class DuplicateNameError(Exception):
    """Raised when a name is already held by another row."""

    def __init__(self, model: type, name: str):
        super().__init__(f"{model.__name__} '{name}' already exists")
        self.model = model
        self.name = name


def find_by_name(
    db: Session, model: type[NamedModel], name: str, exclude_id: int | None = None
) -> NamedModel | None:
    """Find a row by exact name, optionally ignoring one id."""
    query = db.query(model).filter(model.name == name)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first()


def _commit_or_conflict(db: Session, model: type, name: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Unique constraint rejected {model.__name__} name '{name}'")
        raise DuplicateNameError(model, name) from e


def create_named(db: Session, model: type[NamedModel], name: str) -> NamedModel:
    """Insert a new row with a unique name.

    The pre-check only covers the common case. Two concurrent requests can both
    pass it, so the unique index decides and its violation is reported the same way.
    """
    if find_by_name(db, model, name) is not None:
        raise DuplicateNameError(model, name)

    obj = model(name=name)
    db.add(obj)
    _commit_or_conflict(db, model, name)
    db.refresh(obj)
    return obj


def rename(db: Session, obj: NamedModel, name: str) -> NamedModel:
    """Rename an existing row, keeping names unique."""
    model = type(obj)
    if find_by_name(db, model, name, exclude_id=obj.id) is not None:
        raise DuplicateNameError(model, name)

    obj.name = name
    _commit_or_conflict(db, model, name)
    db.refresh(obj)
    return obj
