"""
Engine and session wiring for the board-draw backend.

Environment (read once at import, .env honoured):
  DATABASE_URL  SQLAlchemy URL, default sqlite:///./boarddraw.db
  SQL_ECHO      "1"/"true"/"yes" logs every statement
"""
import os
from pathlib import Path
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./boarddraw.db"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
SQL_ECHO = os.getenv("SQL_ECHO", "").strip().lower() in {"1", "true", "yes"}


def build_engine(url: str, echo: bool = False) -> Engine:
    """SQLite files get their directory created and cross-thread access enabled."""
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo)

    file_part = url.split("///", 1)[-1]
    if file_part and ":memory:" not in file_part:
        Path(file_part).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})


engine: Engine = build_engine(DATABASE_URL, echo=SQL_ECHO)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db() -> None:
    """Create every board table that does not exist yet."""
    # Registers all table models on SQLModel.metadata
    import boarddraw.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
