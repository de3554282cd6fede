from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from karaoke_sync import app as app_mod
from karaoke_sync.app import follow, preview, run_session
from karaoke_sync.config import AppConfig
from karaoke_sync.i18n import set_lang
from karaoke_sync.lrc.model import Timeline
from karaoke_sync.lrc.parse import parse_timeline
from karaoke_sync.mpris.errors import NoPlayersFound, PlayerUnavailable
from karaoke_sync.playback.clock import ClockSource


@pytest.fixture
def cfg(tmp_path):
    set_lang("en")
    return AppConfig(
        config_dir=tmp_path / "config",
        lang="EN",
        encoding="utf-8",
        preferred_player=None,
        tail_ms=1000,
        refresh_hz=20.0,
        context_lines=1,
        use_alt_screen=False,
    )


class ScriptedSource:
    """Replays a list of positions, one per poll."""

    def __init__(self, positions, duration_ms=10_000, playing=True):
        self.positions = list(positions)
        self._duration_ms = duration_ms
        self._playing = playing
        self.polls = 0

    def position_ms(self) -> int:
        pos = self.positions[min(self.polls, len(self.positions) - 1)]
        self.polls += 1
        if isinstance(pos, Exception):
            raise pos
        return pos

    def duration_ms(self) -> int:
        return self._duration_ms

    def is_playing(self) -> bool:
        return self._playing


TIMELINE = parse_timeline("[00:01]one\n[00:02]two\n[00:03]three\n")


def test_session_renders_on_line_change(cfg):
    renderer = Mock()
    source = ScriptedSource([0, 10, 1000, 1010, 2500], duration_ms=0)
    sleep = Mock()

    rc = run_session(cfg, TIMELINE, source, renderer, title="T", max_ticks=5, sleep=sleep)

    assert rc == 0
    assert sleep.call_count == 5
    sleep.assert_called_with(0.05)
    idxs = [c.kwargs["current_idx"] for c in renderer.render.call_args_list]
    # 10 and 1010 repeat the previous frame; 1000 only moves the clock label
    assert idxs == [0, 0, 1]
    args = renderer.render.call_args_list[-1]
    assert args.args == ("T", ["one", "two", "three"])
    assert args.kwargs["context_lines"] == 1
    assert args.kwargs["footer"].startswith("0:02 / 0:00")


def test_session_redraws_when_clock_label_changes(cfg):
    renderer = Mock()
    source = ScriptedSource([1000, 1500, 2000], duration_ms=100_000)
    run_session(cfg, parse_timeline("[00:01]only\n"), source, renderer, title="T", max_ticks=3, sleep=Mock())
    footers = [c.kwargs["footer"] for c in renderer.render.call_args_list]
    assert [f.split(" [")[0] for f in footers] == ["0:01 / 1:40", "0:02 / 1:40"]


def test_session_marks_paused(cfg):
    renderer = Mock()
    source = ScriptedSource([0], playing=False)
    run_session(cfg, TIMELINE, source, renderer, title="T", max_ticks=1, sleep=Mock())
    assert renderer.render.call_args.kwargs["footer"].endswith("[paused]")


def test_session_empty_timeline_shows_message(cfg):
    renderer = Mock()
    source = ScriptedSource([5000])
    run_session(cfg, Timeline(), source, renderer, title="T", max_ticks=1, sleep=Mock())
    call = renderer.render.call_args
    assert call.args[1] == ["No timed lyrics in this file"]
    assert call.kwargs["current_idx"] == -1


def test_session_survives_player_unavailable(cfg):
    renderer = Mock()
    source = ScriptedSource([PlayerUnavailable("gone"), 2000])
    run_session(cfg, TIMELINE, source, renderer, title="T", max_ticks=2, sleep=Mock())
    assert renderer.render.call_count == 1
    assert renderer.render.call_args.kwargs["current_idx"] == 1


def test_session_notice_when_player_stays_unavailable(cfg):
    renderer = Mock()
    gone = PlayerUnavailable("org.mpris.MediaPlayer2.vlc vanished")
    source = ScriptedSource([1000] + [gone] * app_mod.UNAVAILABLE_NOTICE_TICKS + [1000])
    ticks = app_mod.UNAVAILABLE_NOTICE_TICKS + 2
    run_session(cfg, TIMELINE, source, renderer, title="T", max_ticks=ticks, sleep=Mock())

    calls = renderer.render.call_args_list
    # first frame, one notice, then the lyrics again once the player is back
    assert len(calls) == 3
    assert calls[1].args[1] == ["MPRIS unavailable: org.mpris.MediaPlayer2.vlc vanished"]
    assert calls[1].kwargs["current_idx"] == -1
    assert calls[2].args[1] == ["one", "two", "three"]
    assert calls[2].kwargs["current_idx"] == 0


def test_session_stops_when_clock_finishes(cfg):
    fake_now = [0.0]
    clock = ClockSource(duration_ms=2500, now=lambda: fake_now[0])
    clock.play()

    def _sleep(s):
        fake_now[0] += s

    renderer = Mock()
    rc = run_session(cfg, TIMELINE, clock, renderer, title="T", until=clock.is_finished, sleep=_sleep)
    assert rc == 0
    assert clock.position_ms() == 2500
    assert renderer.render.call_args.kwargs["current_idx"] == 1


def test_preview_uses_last_line_plus_tail(cfg, tmp_path):
    lrc = tmp_path / "song.lrc"
    lrc.write_text("[00:04]x\n", encoding="utf-8")
    seen = {}

    def _fake_run(cfg_, timeline, source, renderer, *, title, until=None, **kw):
        seen["duration"] = source.duration_ms()
        seen["title"] = title
        seen["texts"] = timeline.texts
        return 0

    with patch.object(app_mod, "run_session", side_effect=_fake_run):
        assert preview(cfg, lrc) == 0
    assert seen == {"duration": 5000, "title": "song", "texts": ["x"]}


def test_follow_without_players_returns_error(cfg, tmp_path):
    pytest.importorskip("dbus")
    with patch("karaoke_sync.mpris.client.MprisClient.pick_player", side_effect=NoPlayersFound("none")):
        assert follow(cfg, tmp_path / "song.lrc", preferred_player=None) == 1
