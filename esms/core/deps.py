"""FastAPI dependencies."""

from typing import Generator

from sqlalchemy.orm import Session

from esms.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    Routers own the commit; anything left uncommitted is rolled back on close.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
