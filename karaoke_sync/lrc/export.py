from __future__ import annotations

import json

from .model import Timeline


def export_json(timeline: Timeline) -> str:
    return json.dumps(
        {"lines": [{"time_ms": ln.time_ms, "text": ln.text} for ln in timeline]},
        ensure_ascii=False,
        indent=2,
    )


def _fmt_lrc_time(ms: int) -> str:
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    # centiseconds, the most widely read precision
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"


def export_lrc(timeline: Timeline) -> str:
    out = [f"[{_fmt_lrc_time(ln.time_ms)}]{ln.text}" for ln in timeline]
    return "\n".join(out) + ("\n" if out else "")


def _fmt_srt_time(ms: int) -> str:
    # HH:MM:SS,mmm
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(timeline: Timeline, last_line_duration_ms: int = 2000) -> str:
    """
    Each cue ends where the next line starts; the last one lasts
    last_line_duration_ms. Blank lines (instrumental gaps) are not emitted
    as cues but still close the previous cue.
    """
    lines = timeline.lines
    out: list[str] = []
    cue = 0
    for i, ln in enumerate(lines):
        if not ln.text:
            continue
        start = ln.time_ms
        if i + 1 < len(lines):
            end = max(lines[i + 1].time_ms, start + 1)
        else:
            end = start + last_line_duration_ms
        cue += 1
        out.append(str(cue))
        out.append(f"{_fmt_srt_time(start)} --> {_fmt_srt_time(end)}")
        out.append(ln.text)
        out.append("")
    return "\n".join(out)
