"""Generate database sessions"""

import os
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

DATABASE_URL = os.getenv("CHESS_DATABASE_URL", "sqlite:///chess.db")


def create_session_factory(url: Optional[str] = None) -> sessionmaker[Session]:
    """Connect to the database (DATABASE_URL unless told otherwise) and make sure all tables exist."""
    engine = create_engine(url or DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False)


def get_db(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
