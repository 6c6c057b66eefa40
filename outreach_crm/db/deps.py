from typing import Iterator

from sqlalchemy.orm import Session

from outreach_crm.db.session import SessionLocal


def get_db() -> Iterator[Session]:
    """Request-scoped session. Uncommitted work is rolled back on error."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
