import logging

from fastapi.testclient import TestClient

from prompt_keeper.core.config import Settings, settings
from prompt_keeper.core.logging_setup import HANDLER_NAME, configure_logging
from prompt_keeper.main import app


def test_app_startup_builds_json_library(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "ROOT_DIR", tmp_path)
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "json")

    with TestClient(app) as client:
        info = client.get("/api/info").json()
        assert info["data_dir"] == str(tmp_path / "data")
        assert info["storage_backend"] == "json"

        folder = client.post("/api/folders", json={"name": "Work", "color": "#fff"}).json()

    assert (tmp_path / "data" / "folders.json").exists()
    assert folder["name"] == "Work"


def test_app_startup_builds_sqlite_library(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "ROOT_DIR", tmp_path)
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "sqlite")

    with TestClient(app) as client:
        prompt = client.post("/api/prompts", json={"title": "Stored"}).json()
        assert client.get(f"/api/prompts/{prompt['id']}").json()["title"] == "Stored"

    assert (tmp_path / "data" / "library.db").exists()


def test_settings_read_prefixed_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PROMPT_KEEPER_ROOT_DIR", str(tmp_path))
    monkeypatch.setenv("PROMPT_KEEPER_STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("PROMPT_KEEPER_BACKEND_CORS_ORIGINS", '["http://localhost:3000", "http://localhost:4000"]')

    configured = Settings()

    assert configured.ROOT_DIR == tmp_path
    assert configured.database_path == tmp_path / "data" / "library.db"
    assert [str(o).rstrip("/") for o in configured.BACKEND_CORS_ORIGINS] == [
        "http://localhost:3000",
        "http://localhost:4000",
    ]


def test_configure_logging_adds_one_named_handler():
    root_logger = logging.getLogger()
    level = root_logger.level
    try:
        configure_logging("debug")
        configure_logging("info")

        ours = [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]
        assert len(ours) == 1
        assert root_logger.level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
            root_logger.removeHandler(handler)
        root_logger.setLevel(level)
