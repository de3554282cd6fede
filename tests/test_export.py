import json

from karaoke_sync.lrc.export import export_json, export_lrc, export_srt
from karaoke_sync.lrc.model import Timeline, TimedLine


def test_export_srt_basic():
    tl = Timeline((TimedLine(0, "a"), TimedLine(1000, "b")))
    srt = export_srt(tl, last_line_duration_ms=2000)
    assert "00:00:00,000 --> 00:00:01,000" in srt
    assert "00:00:01,000 --> 00:00:03,000" in srt
    assert "\na\n" in srt
    assert "\nb\n" in srt


def test_export_srt_skips_blank_lines_as_cues():
    tl = Timeline((TimedLine(0, "a"), TimedLine(1000, ""), TimedLine(5000, "b")))
    srt = export_srt(tl)
    assert srt.startswith("1\n00:00:00,000 --> 00:00:01,000\na\n")
    assert "2\n00:00:05,000 --> 00:00:07,000\nb\n" in srt
    assert "3\n" not in srt


def test_export_srt_empty():
    assert export_srt(Timeline()) == ""


def test_export_lrc_normalized():
    tl = Timeline((TimedLine(62_050, "x"), TimedLine(600_000, "")))
    assert export_lrc(tl) == "[01:02.05]x\n[10:00.00]\n"
    assert export_lrc(Timeline()) == ""


def test_export_json():
    data = json.loads(export_json(Timeline((TimedLine(1, "ça"),))))
    assert data == {"lines": [{"time_ms": 1, "text": "ça"}]}
