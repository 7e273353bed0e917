from contextlib import contextmanager
import logging
from models import db

@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction.

    Commits on success. On any exception the session is rolled back and the
    exception re-raised; user-facing domain errors (those carrying a 4xx
    ``status``) are logged without a traceback.
    """
    try:
        yield
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        if getattr(e, "status", 500) < 500:
            logging.info(f"{message}: %s", e)
        else:
            logging.error(f"{message}: %s", e, exc_info=True)
        raise
