from typing import List
from fastapi import APIRouter, Depends

from prompt_keeper.api.deps import get_library
from prompt_keeper.core.config import settings
from prompt_keeper.services.library import PromptLibrary

router = APIRouter()


@router.get("/info")
def get_info():
    return {
        "data_dir": str(settings.data_dir),
        "storage_backend": settings.STORAGE_BACKEND,
        "version": settings.APP_VERSION,
    }


@router.get("/tags", response_model=List[str])
def list_tags(library: PromptLibrary = Depends(get_library)):
    return library.list_tags()
