import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from database.models import Base

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///resumerank.db")


def make_engine(url: str = DATABASE_URL, **kwargs):
    if url.startswith("sqlite"):
        # Sessions may be used from worker threads
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, **kwargs)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=bind or engine)
