from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class PositionSource(Protocol):
    def position_ms(self) -> int: ...

    def duration_ms(self) -> int: ...

    def is_playing(self) -> bool: ...


class ClockSource:
    """
    Position source without audio: a monotonic clock with play/pause/seek.

    Used for previewing a lyric file at its own pace. Position stops
    advancing at the duration.
    """

    def __init__(
        self,
        duration_ms: int,
        start_ms: int = 0,
        now: Callable[[], float] = time.monotonic,
    ):
        self._duration_ms = max(int(duration_ms), 0)
        self._now = now
        self._base_ms = max(int(start_ms), 0)
        self._started_at: float | None = None

    def _elapsed_ms(self) -> int:
        if self._started_at is None:
            return 0
        return round((self._now() - self._started_at) * 1000)

    def position_ms(self) -> int:
        pos = self._base_ms + self._elapsed_ms()
        if self._duration_ms:
            pos = min(pos, self._duration_ms)
        return pos

    def duration_ms(self) -> int:
        return self._duration_ms

    def is_playing(self) -> bool:
        return self._started_at is not None

    def is_finished(self) -> bool:
        return bool(self._duration_ms) and self.position_ms() >= self._duration_ms

    def play(self) -> None:
        if self._started_at is None:
            self._started_at = self._now()

    def pause(self) -> None:
        if self._started_at is not None:
            self._base_ms = self.position_ms()
            self._started_at = None

    def seek(self, position_ms: int) -> None:
        logger.debug("Seek to %d ms", position_ms)
        self._base_ms = max(int(position_ms), 0)
        if self._started_at is not None:
            self._started_at = self._now()
