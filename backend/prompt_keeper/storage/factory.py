import logging

from prompt_keeper.core.config import Settings
from prompt_keeper.db.engine import create_sqlite_engine
from prompt_keeper.storage.base import LibraryStore
from prompt_keeper.storage.json_file import JsonFileStore
from prompt_keeper.storage.sql import SqlStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> LibraryStore:
    """Create the backend selected by ``STORAGE_BACKEND``."""
    settings.ensure_dirs()
    if settings.STORAGE_BACKEND == "sqlite":
        logger.info("Using SQLite library store", extra={"path": str(settings.database_path)})
        return SqlStore(create_sqlite_engine(settings.database_path))

    logger.info("Using JSON file library store", extra={"path": str(settings.data_dir)})
    return JsonFileStore(settings.data_dir)
