from typing import List, Literal, Union
from pathlib import Path
from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Prompt Keeper"
    API_PREFIX: str = "/api"
    APP_VERSION: str = "0.1.0"

    # Root directory for all Prompt Keeper data
    # Can be overridden with PROMPT_KEEPER_ROOT_DIR environment variable
    ROOT_DIR: Path = Path.home() / ".prompt-keeper"

    # "json" keeps one file per collection (folders.json, prompts.json, presets.json),
    # "sqlite" keeps everything in library.db
    STORAGE_BACKEND: Literal["json", "sqlite"] = "json"

    # Seconds of inactivity before a pending autosave is written
    AUTOSAVE_DELAY: float = 1.0

    LOG_LEVEL: str = "INFO"

    HOST: str = "127.0.0.1"
    PORT: int = 3001

    # BACKEND_CORS_ORIGINS is a JSON-formatted list of origins
    # e.g: '["http://localhost", "http://localhost:5173"]'
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    model_config = SettingsConfigDict(case_sensitive=True, env_prefix="PROMPT_KEEPER_")

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @property
    def data_dir(self) -> Path:
        """Directory holding the library collections."""
        return self.ROOT_DIR / "data"

    @property
    def database_path(self) -> Path:
        """Path to the SQLite database used by the sqlite backend."""
        return self.data_dir / "library.db"

    def ensure_dirs(self) -> None:
        """Create all required directories if they don't exist."""
        self.ROOT_DIR.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(exist_ok=True)


settings = Settings()
