import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prompt_keeper.api.api import api_router
from prompt_keeper.core.config import settings
from prompt_keeper.core.error_handlers import register_error_handlers
from prompt_keeper.core.logging_setup import configure_logging
from prompt_keeper.services.library import PromptLibrary
from prompt_keeper.storage.factory import build_store

logger = logging.getLogger(__name__)

app = FastAPI(title="Prompt Keeper API", version=settings.APP_VERSION)
register_error_handlers(app)


@app.on_event("startup")
def on_startup():
    configure_logging()
    app.state.library = PromptLibrary(build_store(settings))
    logger.info(
        "Prompt Keeper API ready",
        extra={"data_dir": str(settings.data_dir), "storage_backend": settings.STORAGE_BACKEND},
    )

# CORS
# Set all CORS enabled origins
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {"message": "Welcome to Prompt Keeper API"}


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
