from contextlib import contextmanager


@contextmanager
def atomic(session):
    """Commit everything done inside the block, or nothing at all."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
