"""Persistence contract shared by every library backend."""
from typing import List, Optional, Protocol, runtime_checkable

from prompt_keeper.models.folder import Folder
from prompt_keeper.models.preset import Preset
from prompt_keeper.models.prompt import Prompt


class StorageError(Exception):
    """Raised when a backend cannot read or write its collections."""


@runtime_checkable
class LibraryStore(Protocol):
    """
    Key-addressed store of folders, prompts and presets.

    ``put_*`` inserts or replaces by id. ``remove_*`` on an unknown id is a
    no-op. Backends raise StorageError for any I/O or decoding failure and
    never apply referential rules of their own.
    """

    def list_folders(self) -> List[Folder]: ...

    def put_folder(self, folder: Folder) -> Folder: ...

    def remove_folder(self, folder_id: str) -> None: ...

    def list_prompts(self) -> List[Prompt]: ...

    def put_prompt(self, prompt: Prompt) -> Prompt: ...

    def remove_prompt(self, prompt_id: str) -> None: ...

    def list_presets(self, prompt_id: Optional[str] = None) -> List[Preset]:
        """All presets, or only those owned by ``prompt_id`` when given."""
        ...

    def put_preset(self, preset: Preset) -> Preset: ...

    def remove_preset(self, preset_id: str) -> None: ...
