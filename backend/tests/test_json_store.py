import json
from datetime import datetime

import pytest

from prompt_keeper.models.prompt import PromptCreate
from prompt_keeper.services.library import PromptLibrary
from prompt_keeper.storage.base import LibraryStore, StorageError
from prompt_keeper.storage.json_file import FOLDERS_FILE, PRESETS_FILE, PROMPTS_FILE, JsonFileStore


def test_missing_files_read_as_empty_collections(json_store):
    assert json_store.list_folders() == []
    assert json_store.list_prompts() == []
    assert json_store.list_presets() == []


def test_store_satisfies_protocol(json_store):
    assert isinstance(json_store, LibraryStore)


def test_collections_are_written_as_json_arrays(json_store):
    library = PromptLibrary(json_store)
    folder = library.create_folder("Work", "#10b981")
    prompt = library.create_prompt(
        PromptCreate(title="Intro", body="Hi [name]", tags=["Email"], folder_id=folder.id, source_url="https://x.test")
    )
    library.create_preset(prompt.id, "Ada", {"name": "Ada"})

    folders = json.loads((json_store.data_dir / FOLDERS_FILE).read_text(encoding="utf-8"))
    prompts = json.loads((json_store.data_dir / PROMPTS_FILE).read_text(encoding="utf-8"))
    presets = json.loads((json_store.data_dir / PRESETS_FILE).read_text(encoding="utf-8"))

    assert [(f["id"], f["name"], f["color"]) for f in folders] == [(folder.id, "Work", "#10b981")]
    assert datetime.fromisoformat(folders[0]["created_at"]) == folder.created_at
    assert prompts[0]["folder_id"] == folder.id
    assert prompts[0]["tags"] == ["email"]
    assert prompts[0]["source_url"] == "https://x.test"
    assert prompts[0]["created_at"] == prompts[0]["updated_at"]
    assert presets[0]["prompt_id"] == prompt.id
    assert presets[0]["values"] == {"name": "Ada"}
    assert not list(json_store.data_dir.glob("*.tmp"))


def test_a_new_store_reads_what_another_wrote(tmp_path):
    writer = PromptLibrary(JsonFileStore(tmp_path))
    prompt = writer.create_prompt(PromptCreate(title="Persisted", body="[x]"))

    reader = PromptLibrary(JsonFileStore(tmp_path))
    loaded = reader.get_prompt(prompt.id)

    assert loaded.title == "Persisted"
    assert loaded.created_at == prompt.created_at
    assert loaded.updated_at == prompt.updated_at


def test_put_replaces_record_with_same_id(json_store):
    library = PromptLibrary(json_store)
    folder = library.create_folder("Work", "#fff")
    folder.name = "Renamed"

    json_store.put_folder(folder)

    assert [(f.id, f.name) for f in json_store.list_folders()] == [(folder.id, "Renamed")]


def test_malformed_json_raises_storage_error(json_store):
    (json_store.data_dir / PROMPTS_FILE).write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        json_store.list_prompts()


def test_non_array_collection_raises_storage_error(json_store):
    (json_store.data_dir / FOLDERS_FILE).write_text('{"id": "x"}', encoding="utf-8")

    with pytest.raises(StorageError):
        PromptLibrary(json_store).list_folders()


def test_invalid_record_raises_storage_error(json_store):
    (json_store.data_dir / PRESETS_FILE).write_text('[{"id": "p1"}]', encoding="utf-8")

    with pytest.raises(StorageError):
        json_store.list_presets("anything")


def test_write_failure_raises_storage_error(json_store, monkeypatch):
    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("prompt_keeper.storage.json_file.os.replace", broken_replace)

    with pytest.raises(StorageError, match="disk full"):
        PromptLibrary(json_store).create_folder("Work", "#fff")
