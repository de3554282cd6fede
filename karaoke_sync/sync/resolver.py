from __future__ import annotations

from bisect import bisect_right

from karaoke_sync.lrc.model import Timeline


def active_index(timeline: Timeline, position_ms: int) -> int:
    """
    Index of the last line with time_ms <= position_ms.

    Falls back to 0 when no line has started yet or the timeline is empty;
    callers that must tell "empty" apart check the timeline themselves.
    """
    i = bisect_right(timeline.times, position_ms) - 1
    return i if i >= 0 else 0


def fraction(position_ms: int, duration_ms: int) -> float:
    # not clamped: a position past the duration reads as > 1.0
    if duration_ms <= 0:
        return 0.0
    return position_ms / duration_ms


def format_clock(ms: int) -> str:
    if ms <= 0:
        return "0:00"
    m, s = divmod(ms // 1000, 60)
    return f"{m}:{s:02d}"
