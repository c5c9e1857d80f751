"""Folders API endpoints."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from prompt_keeper.api.deps import get_library
from prompt_keeper.models.folder import Folder, FolderCreate, FolderRead, FolderUpdate
from prompt_keeper.services.library import PromptLibrary

router = APIRouter()


@router.get("", response_model=List[FolderRead])
def list_folders(library: PromptLibrary = Depends(get_library)):
    return library.list_folders()


@router.post("", response_model=FolderRead)
def create_folder(data: FolderCreate, library: PromptLibrary = Depends(get_library)):
    return library.create_folder(data.name, data.color)


@router.put("/{folder_id}", response_model=FolderRead)
def update_folder(folder_id: str, data: FolderUpdate, library: PromptLibrary = Depends(get_library)):
    folder = library.update_folder(Folder(id=folder_id, name=data.name, color=data.color))
    if not folder:
        raise HTTPException(status_code=404, detail="Folder not found")
    return folder


@router.delete("/{folder_id}")
def delete_folder(folder_id: str, library: PromptLibrary = Depends(get_library)):
    """Delete a folder. Prompts filed under it keep their folder_id."""
    library.delete_folder(folder_id)
    return {"ok": True}
