"""
In-memory theme preference store (dev/tests).

Satisfies PreferenceStorePort. Can be configured to delay or fail so the
theme session's timeout and fallback paths can be exercised.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class InMemoryPreferenceStore:
    """Dict-backed viewer -> theme name store."""

    _prefs: dict[str, str] = field(default_factory=dict)
    _delay_seconds: float = 0.0
    _fail_reads: bool = False
    _fail_writes: bool = False
    writes: list[tuple[str, str | None]] = field(default_factory=list)

    async def get_theme_name(self, viewer_id: str) -> str | None:
        await self._wait()
        if self._fail_reads:
            raise ConnectionError("preference store unavailable")
        return self._prefs.get(viewer_id)

    async def set_theme_name(self, viewer_id: str, theme_name: str) -> None:
        await self._wait()
        if self._fail_writes:
            raise ConnectionError("preference store unavailable")
        self._prefs[viewer_id] = theme_name
        self.writes.append((viewer_id, theme_name))
        logger.debug("Stored theme %r for viewer %s", theme_name, viewer_id)

    async def clear(self, viewer_id: str) -> None:
        await self._wait()
        if self._fail_writes:
            raise ConnectionError("preference store unavailable")
        self._prefs.pop(viewer_id, None)
        self.writes.append((viewer_id, None))

    async def _wait(self) -> None:
        if self._delay_seconds > 0:
            await asyncio.sleep(self._delay_seconds)

    # --- Testing Helpers ---

    def peek(self, viewer_id: str) -> str | None:
        return self._prefs.get(viewer_id)

    def seed(self, viewer_id: str, theme_name: str) -> None:
        self._prefs[viewer_id] = theme_name

    def set_delay(self, seconds: float) -> None:
        self._delay_seconds = seconds

    def set_failure(self, reads: bool = False, writes: bool = False) -> None:
        self._fail_reads = reads
        self._fail_writes = writes
