import asyncio
import time

import pytest

from prompt_keeper.models.prompt import Prompt, PromptCreate
from prompt_keeper.services.autosave import DebouncedSaver


def test_only_latest_scheduled_state_is_saved():
    saved = []

    async def scenario():
        saver = DebouncedSaver(saved.append, delay=0.05)
        for draft in ("H", "He", "Hello"):
            saver.schedule(draft)
            await asyncio.sleep(0.01)
        assert saver.pending
        await asyncio.sleep(0.2)
        assert not saver.pending

    asyncio.run(scenario())
    assert saved == ["Hello"]


def test_flush_writes_pending_state_immediately():
    saved = []

    async def scenario():
        saver = DebouncedSaver(saved.append, delay=60)
        saver.schedule("draft")
        await saver.flush()
        assert not saver.pending

    asyncio.run(scenario())
    assert saved == ["draft"]


def test_cancel_drops_pending_state():
    saved = []

    async def scenario():
        saver = DebouncedSaver(saved.append, delay=0.05)
        saver.schedule("draft")
        saver.cancel()
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert saved == []


def test_flush_surfaces_save_errors():
    def failing_save(item):
        raise RuntimeError("store offline")

    async def scenario():
        saver = DebouncedSaver(failing_save, delay=60)
        saver.schedule("draft")
        await saver.flush()

    with pytest.raises(RuntimeError, match="store offline"):
        asyncio.run(scenario())


def test_autosave_updates_prompt_through_library(library):
    prompt = library.create_prompt(PromptCreate(title="Draft", body=""))

    async def scenario():
        saver = DebouncedSaver(library.update_prompt, delay=0.02)
        for body in ("W", "Wr", "Write a [tone] note"):
            saver.schedule(Prompt(id=prompt.id, title=prompt.title, body=body))
        await asyncio.sleep(0.1)
        return await saver.flush()

    result = asyncio.run(scenario())

    assert result.body == "Write a [tone] note"
    assert library.get_prompt(prompt.id).body == "Write a [tone] note"
    assert library.get_prompt(prompt.id).updated_at >= prompt.created_at


def _slow_store(delays):
    """A save callable that stores the body after a per-draft delay."""
    state = {"body": None, "writes": []}

    def save(draft):
        time.sleep(delays.get(draft, 0))
        state["body"] = draft
        state["writes"].append(draft)
        return draft

    return state, save


def test_flush_waits_for_slower_earlier_save():
    state, save = _slow_store({"old": 0.3})

    async def scenario():
        saver = DebouncedSaver(save, delay=0.01)
        saver.schedule("old")
        await asyncio.sleep(0.05)
        saver.schedule("new")
        result = await saver.flush()
        assert result == "new"
        assert state["body"] == "new"
        await asyncio.sleep(0.4)

    asyncio.run(scenario())
    assert state["writes"] == ["old", "new"]
    assert state["body"] == "new"


def test_newer_save_is_written_after_one_in_flight():
    state, save = _slow_store({"old": 0.2})

    async def scenario():
        saver = DebouncedSaver(save, delay=0.01)
        saver.schedule("old")
        await asyncio.sleep(0.05)
        saver.schedule("new")
        await asyncio.sleep(0.4)
        assert not saver.pending
        assert await saver.flush() == "new"

    asyncio.run(scenario())
    assert state["writes"] == ["old", "new"]
    assert state["body"] == "new"


def test_failed_superseded_save_does_not_block_later_saves():
    writes = []

    def save(draft):
        if draft == "bad":
            time.sleep(0.1)
            raise RuntimeError("store offline")
        writes.append(draft)
        return draft

    async def scenario():
        saver = DebouncedSaver(save, delay=0.01)
        saver.schedule("bad")
        await asyncio.sleep(0.05)
        saver.schedule("good")
        return await saver.flush()

    assert asyncio.run(scenario()) == "good"
    assert writes == ["good"]
