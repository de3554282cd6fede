from __future__ import annotations

from dataclasses import dataclass
import re

from .model import Timeline, TimedLine

# [m:ss] / [mm:ss] / [mm:ss.x] / [mm:ss.xx] / [mm:ss.xxx], first tag per line only
_LINE_RE = re.compile(r"\[(\d{1,2}):(\d{2})(?:\.(\d{1,3}))?\]\s*(.*)", re.ASCII)


@dataclass(frozen=True, slots=True)
class TagMatch:
    minutes: str
    seconds: str
    fraction: str
    text: str


@dataclass(frozen=True, slots=True)
class ParseStats:
    lines_total: int
    lines_matched: int
    lines_ignored: int
    entries_total: int


def match_line(line: str) -> TagMatch | None:
    m = _LINE_RE.search(line)
    if m is None:
        return None
    return TagMatch(
        minutes=m.group(1),
        seconds=m.group(2),
        fraction=m.group(3) or "",
        text=m.group(4).strip(),
    )


def tag_to_ms(tag: TagMatch) -> int:
    # "5" -> 500ms, "05" -> 50ms, "123" -> 123ms; seconds are not range-checked
    frac_ms = int(tag.fraction.ljust(3, "0")) if tag.fraction else 0
    return int(tag.minutes) * 60_000 + int(tag.seconds) * 1_000 + frac_ms


def parse_timeline_with_stats(text: str) -> tuple[Timeline, ParseStats]:
    lines: list[TimedLine] = []
    total = 0

    for raw in text.splitlines():
        total += 1
        tag = match_line(raw)
        if tag is None:
            continue
        lines.append(TimedLine(time_ms=tag_to_ms(tag), text=tag.text))

    # list.sort is stable, ties keep source order
    lines.sort(key=lambda ln: ln.time_ms)

    timeline = Timeline(lines=tuple(lines))
    stats = ParseStats(
        lines_total=total,
        lines_matched=len(lines),
        lines_ignored=total - len(lines),
        entries_total=len(timeline),
    )
    return timeline, stats


def parse_timeline(text: str) -> Timeline:
    """
    Best-effort extraction of timed lines from LRC-style text.

    - one entry per line carrying a [mm:ss(.fff)] tag; the rest of the line is the text
    - metadata tags ([ti:], [ar:], [offset:]) and untagged lines are skipped
    - never raises; unusable input yields an empty Timeline
    """
    timeline, _stats = parse_timeline_with_stats(text)
    return timeline
