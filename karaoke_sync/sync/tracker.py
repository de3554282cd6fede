from __future__ import annotations

from dataclasses import dataclass

from karaoke_sync.lrc.model import Timeline

from .resolver import active_index


@dataclass(slots=True)
class LineTracker:
    """
    Per-session wrapper around active_index: O(log n) lookup, reports only changes.
    """

    timeline: Timeline
    last_idx: int = -1

    def current_index(self, now_ms: int) -> int:
        return active_index(self.timeline, now_ms)

    def changed_index(self, now_ms: int) -> int | None:
        i = self.current_index(now_ms)
        if i != self.last_idx:
            self.last_idx = i
            return i
        return None

    def reset(self) -> None:
        self.last_idx = -1
