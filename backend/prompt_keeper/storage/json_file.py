"""File-backed library store.

Each collection lives in its own JSON array file inside the data directory.
Every mutation reads the whole collection, changes it and rewrites the file.
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Callable, List, Optional, Type, TypeVar

from pydantic import ValidationError
from sqlmodel import SQLModel

from prompt_keeper.models.folder import Folder
from prompt_keeper.models.preset import Preset
from prompt_keeper.models.prompt import Prompt
from prompt_keeper.storage.base import StorageError

logger = logging.getLogger(__name__)

FOLDERS_FILE = "folders.json"
PROMPTS_FILE = "prompts.json"
PRESETS_FILE = "presets.json"

RecordT = TypeVar("RecordT", bound=SQLModel)


class JsonFileStore:
    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        # Serializes read-modify-write cycles within this process.
        self._lock = threading.RLock()
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create data directory {self.data_dir}: {exc}") from exc

    def _path(self, filename: str) -> Path:
        return self.data_dir / filename

    def _read(self, filename: str, model: Type[RecordT]) -> List[RecordT]:
        path = self._path(filename)
        if not path.exists():
            return []
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to read collection", extra={"path": str(path), "error": str(exc)})
            raise StorageError(f"Cannot read {path}: {exc}") from exc

        if not isinstance(payload, list):
            raise StorageError(f"Malformed collection in {path}: expected a JSON array")
        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise StorageError(f"Malformed record in {path}: {exc}") from exc

    def _write(self, filename: str, records: List[SQLModel]) -> None:
        path = self._path(filename)
        tmp_path = path.with_name(f"{path.name}.tmp")
        payload = [record.model_dump(mode="json") for record in records]
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError as exc:
            logger.error("Failed to write collection", extra={"path": str(path), "error": str(exc)})
            raise StorageError(f"Cannot write {path}: {exc}") from exc

    def _put(self, filename: str, model: Type[RecordT], record: RecordT) -> RecordT:
        with self._lock:
            records = self._read(filename, model)
            for idx, existing in enumerate(records):
                if existing.id == record.id:
                    records[idx] = record
                    break
            else:
                records.append(record)
            self._write(filename, records)
        return record

    def _remove_where(
        self, filename: str, model: Type[RecordT], predicate: Callable[[RecordT], bool]
    ) -> int:
        with self._lock:
            records = self._read(filename, model)
            kept = [r for r in records if not predicate(r)]
            removed = len(records) - len(kept)
            if removed:
                self._write(filename, kept)
        return removed

    # --- Folders ---
    def list_folders(self) -> List[Folder]:
        with self._lock:
            return self._read(FOLDERS_FILE, Folder)

    def put_folder(self, folder: Folder) -> Folder:
        return self._put(FOLDERS_FILE, Folder, folder)

    def remove_folder(self, folder_id: str) -> None:
        self._remove_where(FOLDERS_FILE, Folder, lambda f: f.id == folder_id)

    # --- Prompts ---
    def list_prompts(self) -> List[Prompt]:
        with self._lock:
            return self._read(PROMPTS_FILE, Prompt)

    def put_prompt(self, prompt: Prompt) -> Prompt:
        return self._put(PROMPTS_FILE, Prompt, prompt)

    def remove_prompt(self, prompt_id: str) -> None:
        self._remove_where(PROMPTS_FILE, Prompt, lambda p: p.id == prompt_id)

    # --- Presets ---
    def list_presets(self, prompt_id: Optional[str] = None) -> List[Preset]:
        with self._lock:
            presets = self._read(PRESETS_FILE, Preset)
        if prompt_id is None:
            return presets
        return [p for p in presets if p.prompt_id == prompt_id]

    def put_preset(self, preset: Preset) -> Preset:
        return self._put(PRESETS_FILE, Preset, preset)

    def remove_preset(self, preset_id: str) -> None:
        self._remove_where(PRESETS_FILE, Preset, lambda p: p.id == preset_id)
