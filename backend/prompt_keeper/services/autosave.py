"""Debounced autosave for editors that write on every keystroke."""
import asyncio
import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from prompt_keeper.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DebouncedSaver(Generic[T]):
    """
    Defers ``save`` until edits pause for ``delay`` seconds.

    Each ``schedule`` call supersedes the pending one, so only the latest
    full state is written. ``save`` is a blocking callable (for example
    ``PromptLibrary.update_prompt``) and runs in a worker thread. Saves run
    one at a time in the order they were scheduled, so a slow earlier save
    never lands after a newer one. Must be used from inside a running event
    loop.
    """

    def __init__(self, save: Callable[[T], Any], delay: Optional[float] = None):
        self.save = save
        self.delay = settings.AUTOSAVE_DELAY if delay is None else delay
        self.last_result: Any = None
        self._pending: Optional[T] = None
        self._task: Optional[asyncio.Task] = None
        self._write_lock = asyncio.Lock()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, item: T) -> None:
        self.cancel()
        self._pending = item
        self._task = asyncio.get_running_loop().create_task(self._run(item))
        self._task.add_done_callback(self._reap)

    def cancel(self) -> None:
        """Drop the pending save, if any. A save already running is not interrupted."""
        if self._pending is not None and self._task and not self._task.done():
            self._task.cancel()
        self._pending = None

    async def flush(self) -> Any:
        """Write the pending state now, or wait for the saves already in flight."""
        if self._pending is not None:
            item = self._pending
            self.cancel()
            return await self._save(item)
        if self._task and not self._task.done():
            return await self._task
        # Wait out a save started by an earlier flush.
        async with self._write_lock:
            return self.last_result

    async def _run(self, item: T) -> Any:
        await asyncio.sleep(self.delay)
        self._pending = None
        return await self._save(item)

    async def _save(self, item: T) -> Any:
        # asyncio.Lock wakes waiters first come, first served.
        async with self._write_lock:
            try:
                self.last_result = await asyncio.to_thread(self.save, item)
            except Exception:
                logger.exception("Autosave failed")
                raise
            return self.last_result

    @staticmethod
    def _reap(task: asyncio.Task) -> None:
        # Superseded tasks are never awaited; their failures were logged in _save.
        if not task.cancelled():
            task.exception()
