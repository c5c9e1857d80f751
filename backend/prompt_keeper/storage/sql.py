"""SQLite-backed library store with per-record writes."""
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Type

from sqlalchemy import literal_column
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from prompt_keeper.db.engine import init_db
from prompt_keeper.models.folder import Folder
from prompt_keeper.models.preset import Preset
from prompt_keeper.models.prompt import Prompt
from prompt_keeper.storage.base import StorageError

logger = logging.getLogger(__name__)

# SQLite keeps the rowid of a row across updates, so this is first-insert order.
INSERTION_ORDER = literal_column("rowid")


class SqlStore:
    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        if create_tables:
            with self._guard("init"):
                init_db(engine)

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("Library database operation failed", extra={"operation": operation})
            raise StorageError(f"{operation} failed: {exc}") from exc

    def _list(self, model: Type[SQLModel], *criteria) -> list:
        with self._guard(f"list {model.__name__}"):
            with Session(self.engine) as session:
                query = select(model).where(*criteria).order_by(INSERTION_ORDER)
                return list(session.exec(query).all())

    def _put(self, record: SQLModel) -> SQLModel:
        with self._guard(f"put {type(record).__name__}"):
            with Session(self.engine) as session:
                merged = session.merge(record)
                session.commit()
                session.refresh(merged)
                return merged

    def _remove(self, model: Type[SQLModel], record_id: str) -> None:
        with self._guard(f"remove {model.__name__}"):
            with Session(self.engine) as session:
                record = session.get(model, record_id)
                if record is None:
                    return
                session.delete(record)
                session.commit()

    # --- Folders ---
    def list_folders(self) -> List[Folder]:
        return self._list(Folder)

    def put_folder(self, folder: Folder) -> Folder:
        return self._put(folder)

    def remove_folder(self, folder_id: str) -> None:
        self._remove(Folder, folder_id)

    # --- Prompts ---
    def list_prompts(self) -> List[Prompt]:
        return self._list(Prompt)

    def put_prompt(self, prompt: Prompt) -> Prompt:
        return self._put(prompt)

    def remove_prompt(self, prompt_id: str) -> None:
        self._remove(Prompt, prompt_id)

    # --- Presets ---
    def list_presets(self, prompt_id: Optional[str] = None) -> List[Preset]:
        if prompt_id is None:
            return self._list(Preset)
        return self._list(Preset, Preset.prompt_id == prompt_id)

    def put_preset(self, preset: Preset) -> Preset:
        return self._put(preset)

    def remove_preset(self, preset_id: str) -> None:
        self._remove(Preset, preset_id)
