"""Prompt library service.

``PromptLibrary`` sits on top of a ``LibraryStore`` and owns the rules the
stores do not know about: identifiers, timestamps, tag normalization and the
prompt -> preset cascade. One instance is built per session and handed to
whoever needs it.

Unknown ids never raise here. Updates return ``None`` and deletes are
idempotent. Store failures surface as ``StorageError`` without retries.
"""
import logging
from typing import Dict, List, Optional

from prompt_keeper.core.variables import extract_variables, render_segments, resolve_prompt
from prompt_keeper.models.common import new_id, utcnow
from prompt_keeper.models.folder import Folder, FOLDER_COLORS
from prompt_keeper.models.preset import Preset
from prompt_keeper.models.prompt import Prompt, PromptCreate, PromptRenderRead
from prompt_keeper.services.search import filter_prompts, normalize_tags
from prompt_keeper.storage.base import LibraryStore

logger = logging.getLogger(__name__)


class PromptLibrary:
    def __init__(self, store: LibraryStore):
        self.store = store

    # --- Folders ---
    def list_folders(self) -> List[Folder]:
        return self.store.list_folders()

    def get_folder(self, folder_id: str) -> Optional[Folder]:
        return next((f for f in self.store.list_folders() if f.id == folder_id), None)

    def create_folder(self, name: str, color: str = FOLDER_COLORS[0]) -> Folder:
        folder = Folder(id=new_id(), name=name, color=color, created_at=utcnow())
        return self.store.put_folder(folder)

    def update_folder(self, folder: Folder) -> Optional[Folder]:
        """Replace name and color of the stored folder with the same id."""
        existing = self.get_folder(folder.id)
        if existing is None:
            logger.info("Folder not found for update", extra={"folder_id": folder.id})
            return None

        updated = Folder(
            id=existing.id,
            name=folder.name,
            color=folder.color,
            created_at=existing.created_at,
        )
        return self.store.put_folder(updated)

    def delete_folder(self, folder_id: str) -> None:
        # Prompts keep their folder_id; readers treat a missing folder as "no folder".
        self.store.remove_folder(folder_id)

    # --- Prompts ---
    def list_prompts(
        self,
        folder_id: Optional[str] = None,
        tag: Optional[str] = None,
        query: Optional[str] = None,
    ) -> List[Prompt]:
        return filter_prompts(self.store.list_prompts(), folder_id=folder_id, tag=tag, query=query)

    def get_prompt(self, prompt_id: str) -> Optional[Prompt]:
        return next((p for p in self.store.list_prompts() if p.id == prompt_id), None)

    def list_tags(self) -> List[str]:
        """Distinct tags across all prompts, alphabetically."""
        return sorted({tag for prompt in self.store.list_prompts() for tag in (prompt.tags or [])})

    def create_prompt(self, data: PromptCreate) -> Prompt:
        now = utcnow()
        prompt = Prompt(
            id=new_id(),
            title=data.title,
            body=data.body,
            tags=normalize_tags(data.tags),
            folder_id=data.folder_id,
            source_url=data.source_url,
            created_at=now,
            updated_at=now,
        )
        return self.store.put_prompt(prompt)

    def update_prompt(self, prompt: Prompt) -> Optional[Prompt]:
        """
        Replace the stored prompt's editable fields.

        ``updated_at`` is always stamped here and ``created_at`` is carried
        over from the stored record, whatever the caller passes in.
        """
        existing = self.get_prompt(prompt.id)
        if existing is None:
            logger.info("Prompt not found for update", extra={"prompt_id": prompt.id})
            return None

        updated = Prompt(
            id=existing.id,
            title=prompt.title,
            body=prompt.body,
            tags=normalize_tags(prompt.tags),
            folder_id=prompt.folder_id,
            source_url=prompt.source_url,
            created_at=existing.created_at,
            updated_at=max(utcnow(), existing.updated_at),
        )
        return self.store.put_prompt(updated)

    def delete_prompt(self, prompt_id: str) -> None:
        """Delete a prompt and every preset saved for it."""
        self.store.remove_prompt(prompt_id)

        presets = self.store.list_presets(prompt_id)
        for preset in presets:
            self.store.remove_preset(preset.id)
        if presets:
            logger.info(
                "Removed presets with deleted prompt",
                extra={"prompt_id": prompt_id, "count": len(presets)},
            )

    def render_prompt(self, prompt_id: str, values: Dict[str, str]) -> Optional[PromptRenderRead]:
        prompt = self.get_prompt(prompt_id)
        if prompt is None:
            return None
        return PromptRenderRead(
            prompt_id=prompt.id,
            variables=extract_variables(prompt.body),
            resolved=resolve_prompt(prompt.body, values),
            segments=render_segments(prompt.body, values),
        )

    # --- Presets ---
    def list_presets(self, prompt_id: Optional[str] = None) -> List[Preset]:
        """Presets saved for ``prompt_id``; an unknown id gives an empty list."""
        return self.store.list_presets(prompt_id)

    def get_preset(self, preset_id: str) -> Optional[Preset]:
        return next((p for p in self.store.list_presets() if p.id == preset_id), None)

    def create_preset(self, prompt_id: str, name: str, values: Dict[str, str]) -> Preset:
        # The owning prompt is not re-checked; callers hold a live prompt.
        preset = Preset(
            id=new_id(),
            prompt_id=prompt_id,
            name=name,
            values=dict(values or {}),
            created_at=utcnow(),
        )
        return self.store.put_preset(preset)

    def delete_preset(self, preset_id: str) -> None:
        self.store.remove_preset(preset_id)
