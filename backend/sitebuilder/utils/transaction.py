from contextlib import contextmanager
from flask import current_app
from sitebuilder.extensions import db

@contextmanager
def transactional():
    """
    Commit the session when the block exits cleanly.

    Any exception rolls back every pending write, audit entries included,
    and is re-raised for the error handlers.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug("Transaction rolled back (%s)", type(exc).__name__)
        raise
