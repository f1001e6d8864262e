# /app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import DATABASE_URL


def _engine_args(url: str) -> dict:
    # The 'check_same_thread' argument is only needed for SQLite.
    if not url.startswith("sqlite"):
        return {}
    args = {"connect_args": {"check_same_thread": False}}
    # An in-memory database only lives as long as its connection, so every
    # session has to share the one connection.
    if url in ("sqlite://", "sqlite:///:memory:"):
        args["poolclass"] = StaticPool
    return args


engine = create_engine(DATABASE_URL, **_engine_args(DATABASE_URL))

# Each instance of this class is a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Creates any missing tables. Called once from the application lifespan."""
    from .base import Base
    Base.metadata.create_all(bind=engine)


# Dependency to get a DB session. Used by the API routers.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
