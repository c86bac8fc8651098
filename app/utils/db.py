from contextlib import contextmanager
import logging
from models import db
from app.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def transactional(message="DB transaction failed"):
    """Commit on success, roll back and re-raise on any error.

    Rejections raised by the services (bad input, missing rows) are
    logged without a traceback.
    """
    try:
        yield
        db.session.commit()
    except (ValidationError, NotFoundError) as e:
        logger.info("%s: %s", message, e)
        db.session.rollback()
        raise
    except Exception as e:
        logger.error("%s: %s", message, e, exc_info=True)
        db.session.rollback()
        raise
