# deebank_admin/crud/base.py
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from deebank_admin.services.errors import BackendUnavailable, DuplicateRecord

logger = logging.getLogger(__name__)


def backend_failure(db: Session, operation: str, exc: Exception):
    db.rollback()
    logger.error(f"Backend call '{operation}' failed: {exc}")
    raise BackendUnavailable(str(exc), operation=operation) from exc


def commit(db: Session, operation: str, instance=None):
    """Commit the unit of work; a unique violation becomes DuplicateRecord."""
    try:
        db.commit()
        if instance is not None:
            db.refresh(instance)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Backend call '{operation}' rejected as duplicate: {e.orig}")
        raise DuplicateRecord(str(e.orig), operation=operation) from e
    except SQLAlchemyError as e:
        backend_failure(db, operation, e)
    return instance
