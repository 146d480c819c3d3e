import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import ConflictError, InternalError
from ..extensions import db

logger = logging.getLogger(__name__)


def commit(conflict_message=None):
    """Commit the session; on failure roll back and raise an app error.

    ``conflict_message`` turns an IntegrityError into a ConflictError, for
    writes whose only expected integrity failure is a uniqueness race.
    """
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        if conflict_message:
            raise ConflictError(conflict_message)
        logger.exception("Integrity error while committing")
        raise InternalError()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Database error while committing")
        raise InternalError()
