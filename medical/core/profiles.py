"""
Partial-update helper shared by the profile services.
"""
import logging
from typing import Any, Dict

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..auth.exceptions import ConcurrencyConflictException, InternalErrorException

logger = logging.getLogger(__name__)


def collect_updates(update_data: BaseModel) -> Dict[str, Any]:
    """
    Turn an update schema into the column values to write.

    Fields left out of the request and fields sent as null are skipped, so
    they keep their stored value. Blank strings clear the column.
    """
    updates = update_data.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in updates.items():
        if isinstance(value, str):
            value = value.strip()
            updates[field] = value or None
    return updates


def apply_profile_update(db: Session, profile, updates: Dict[str, Any], owner_id: str) -> None:
    """
    Write ``updates`` onto ``profile`` as a single versioned UPDATE.

    Raises:
        ConcurrencyConflictException: If the row changed since it was read
        InternalErrorException: For any other database failure
    """
    profile_type = type(profile).__name__
    for field, value in updates.items():
        setattr(profile, field, value)

    try:
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.error(f"Concurrency error updating {profile_type} for User ID {owner_id}: {str(e)}")
        raise ConcurrencyConflictException() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error updating {profile_type} for User ID {owner_id}: {str(e)}")
        raise InternalErrorException("Failed to update profile due to a database error.") from e

    logger.info(f"{profile_type} updated successfully for User ID {owner_id} ({sorted(updates)})")
