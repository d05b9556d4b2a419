from contextlib import contextmanager
from blockhub.extensions import db

@contextmanager
def transactional(session=None):
    """
    Context manager for database transactions.

    Commits when the block exits cleanly; on any exception rolls back
    everything flushed inside it and re-raises.
    """
    session = session or db.session
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
