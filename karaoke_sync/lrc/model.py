from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True, slots=True)
class TimedLine:
    time_ms: int
    text: str


@dataclass(frozen=True, slots=True)
class Timeline:
    """
    Lyric lines sorted by time_ms (stable: equal timestamps keep source order).
    Never mutated; a re-parse produces a new Timeline.
    """

    lines: tuple[TimedLine, ...] = ()
    # kept alongside lines so per-tick lookups can bisect without rebuilding
    times: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "times", tuple(ln.time_ms for ln in self.lines))

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[TimedLine]:
        return iter(self.lines)

    def __getitem__(self, idx: int) -> TimedLine:
        return self.lines[idx]

    def __bool__(self) -> bool:
        return bool(self.lines)

    @property
    def texts(self) -> list[str]:
        return [ln.text for ln in self.lines]

    @property
    def last_time_ms(self) -> int:
        return self.lines[-1].time_ms if self.lines else 0
