"""Presets API endpoints for saved variable values."""
from typing import List, Optional
from fastapi import APIRouter, Depends

from prompt_keeper.api.deps import get_library
from prompt_keeper.models.preset import PresetCreate, PresetRead
from prompt_keeper.services.library import PromptLibrary

router = APIRouter()


@router.get("", response_model=List[PresetRead])
def list_presets(prompt_id: Optional[str] = None, library: PromptLibrary = Depends(get_library)):
    """Presets for one prompt, or all presets when prompt_id is omitted."""
    return library.list_presets(prompt_id)


@router.post("", response_model=PresetRead)
def create_preset(data: PresetCreate, library: PromptLibrary = Depends(get_library)):
    return library.create_preset(data.prompt_id, data.name, data.values)


@router.delete("/{preset_id}")
def delete_preset(preset_id: str, library: PromptLibrary = Depends(get_library)):
    library.delete_preset(preset_id)
    return {"ok": True}
