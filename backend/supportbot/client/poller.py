from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from supportbot.config import settings

logger = logging.getLogger(__name__)


class DocumentListPoller:
    """Refreshes the document list on an interval until stopped.

    Use ``async with`` to tie polling to the lifetime of an admin view, or call
    ``start()``/``stop()`` explicitly.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[list[dict[str, Any]]]],
        on_update: Callable[[list[dict[str, Any]]], Any],
        interval: float | None = None,
    ) -> None:
        self.fetch = fetch
        self.on_update = on_update
        self.interval = settings.document_poll_interval if interval is None else interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _refresh(self) -> None:
        try:
            documents = await self.fetch()
            result = self.on_update(documents)
            if asyncio.iscoroutine(result):
                await result
        except Exception as exc:
            logger.warning("Document refresh failed", exc_info=exc)

    async def _run(self) -> None:
        while True:
            await self._refresh()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> DocumentListPoller:
        self.start()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.stop()
