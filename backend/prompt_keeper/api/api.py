from fastapi import APIRouter
from prompt_keeper.api.endpoints import folders, presets, prompts, status

api_router = APIRouter()
api_router.include_router(folders.router, prefix="/folders", tags=["folders"])
api_router.include_router(prompts.router, prefix="/prompts", tags=["prompts"])
api_router.include_router(presets.router, prefix="/presets", tags=["presets"])
api_router.include_router(status.router, tags=["status"])
