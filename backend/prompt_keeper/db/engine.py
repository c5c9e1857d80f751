from pathlib import Path
from typing import Union

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel, create_engine

# Registers the library tables with SQLModel.metadata
from prompt_keeper.models.folder import Folder  # noqa: F401
from prompt_keeper.models.preset import Preset  # noqa: F401
from prompt_keeper.models.prompt import Prompt  # noqa: F401


def _set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


def create_sqlite_engine(path: Union[str, Path, None] = None) -> Engine:
    """Engine for the library database; ``None`` gives a private in-memory database."""
    if path is None:
        # StaticPool keeps the single in-memory connection alive across sessions.
        return create_engine(
            "sqlite://",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    # NullPool closes connections immediately so the file is never held open
    # between requests.
    engine = create_engine(
        f"sqlite:///{path}",
        echo=False,
        connect_args={"check_same_thread": False, "timeout": 5.0},
        poolclass=NullPool,
    )
    event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def init_db(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
