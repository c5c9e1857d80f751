"""
Prompts API endpoints.

- GET /prompts - List prompts, optionally filtered by folder, tag and search text
- POST /prompts - Create prompt
- GET/PUT/DELETE /prompts/{prompt_id} - Read, replace, delete (presets go with it)
- POST /prompts/{prompt_id}/render - Fill placeholders and return the preview
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from prompt_keeper.api.deps import get_library
from prompt_keeper.models.prompt import (
    Prompt,
    PromptCreate,
    PromptRead,
    PromptRender,
    PromptRenderRead,
    PromptUpdate,
)
from prompt_keeper.services.library import PromptLibrary

router = APIRouter()


@router.get("", response_model=List[PromptRead])
def list_prompts(
    folder_id: Optional[str] = None,
    tag: Optional[str] = None,
    q: Optional[str] = Query(None, description="Free-text search over title, body and tags"),
    library: PromptLibrary = Depends(get_library),
):
    return library.list_prompts(folder_id=folder_id, tag=tag, query=q)


@router.post("", response_model=PromptRead)
def create_prompt(data: PromptCreate, library: PromptLibrary = Depends(get_library)):
    return library.create_prompt(data)


@router.get("/{prompt_id}", response_model=PromptRead)
def get_prompt(prompt_id: str, library: PromptLibrary = Depends(get_library)):
    prompt = library.get_prompt(prompt_id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return prompt


@router.put("/{prompt_id}", response_model=PromptRead)
def update_prompt(prompt_id: str, data: PromptUpdate, library: PromptLibrary = Depends(get_library)):
    prompt = library.update_prompt(Prompt(id=prompt_id, **data.model_dump()))
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return prompt


@router.delete("/{prompt_id}")
def delete_prompt(prompt_id: str, library: PromptLibrary = Depends(get_library)):
    library.delete_prompt(prompt_id)
    return {"ok": True}


@router.post("/{prompt_id}/render", response_model=PromptRenderRead)
def render_prompt(prompt_id: str, data: PromptRender, library: PromptLibrary = Depends(get_library)):
    rendered = library.render_prompt(prompt_id, data.values)
    if not rendered:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return rendered
