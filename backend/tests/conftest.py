import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from prompt_keeper.api.api import api_router
from prompt_keeper.api.deps import get_library
from prompt_keeper.core.error_handlers import register_error_handlers
from prompt_keeper.db.engine import create_sqlite_engine
from prompt_keeper.services.library import PromptLibrary
from prompt_keeper.storage.json_file import JsonFileStore
from prompt_keeper.storage.sql import SqlStore


@pytest.fixture()
def engine():
    engine = create_sqlite_engine(None)
    yield engine
    engine.dispose()


@pytest.fixture()
def json_store(tmp_path):
    return JsonFileStore(tmp_path / "data")


@pytest.fixture()
def sql_store(engine):
    return SqlStore(engine)


@pytest.fixture(params=["json", "sqlite"])
def store(request):
    """Every library test runs once against each backend."""
    return request.getfixturevalue("json_store" if request.param == "json" else "sql_store")


@pytest.fixture()
def library(store):
    return PromptLibrary(store)


def build_app(library: PromptLibrary) -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")
    app.dependency_overrides[get_library] = lambda: library
    return app


@pytest.fixture()
def client(library):
    return TestClient(build_app(library))
