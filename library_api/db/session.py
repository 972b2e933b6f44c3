from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from library_api.core.config import get_settings


settings = get_settings()

engine = create_engine(settings.database_url, echo=settings.sql_echo, future=True)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator:
    """Provide a SQLAlchemy session scoped to the request lifecycle."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Commit the enclosed writes as one transaction, rolling back on any failure."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
