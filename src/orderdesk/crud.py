"""Single-operation helpers shared by the resource routers."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from orderdesk.exceptions import ConflictError
from orderdesk.exceptions import CreateFailedError
from orderdesk.exceptions import NotFoundError
from orderdesk.exceptions import StorageError

logger = logging.getLogger(__name__)


def get_or_404(db: Session, model, id: int, label: str):
    obj = db.get(model, id)
    if obj is None:
        raise NotFoundError(f"{label[:1].upper()}{label[1:]} {id} not found")
    return obj


def create(db: Session, obj, label: str):
    db.add(obj)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create %s", label)
        raise CreateFailedError(f"Failed to create {label}") from e
    db.refresh(obj)
    return obj


def _commit_change(db: Session, action: str, label: str, id: int) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Failed to %s %s %s: constraint violated", action, label, id, exc_info=True)
        raise ConflictError(f"Failed to {action} {label}: conflicts with existing data") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to %s %s %s", action, label, id)
        raise StorageError(f"Failed to {action} {label}") from e


def update(db: Session, obj, changes: dict[str, Any], label: str):
    id = obj.id
    for field, value in changes.items():
        setattr(obj, field, value)
    db.add(obj)
    _commit_change(db, "update", label, id)
    db.refresh(obj)
    return obj


def delete(db: Session, obj, label: str) -> None:
    id = obj.id
    db.delete(obj)
    _commit_change(db, "delete", label, id)
