from __future__ import annotations

import logging
import signal
import time
from pathlib import Path
from typing import Callable

from karaoke_sync.config import AppConfig
from karaoke_sync.i18n import t
from karaoke_sync.lrc.loader import load_timeline
from karaoke_sync.lrc.model import Timeline
from karaoke_sync.mpris.errors import NoPlayersFound, PlayerUnavailable
from karaoke_sync.playback.clock import ClockSource, PositionSource
from karaoke_sync.render.ansi import AnsiRenderer, progress_line
from karaoke_sync.sync.tracker import LineTracker

logger = logging.getLogger(__name__)

# consecutive failed polls before the frame is replaced by a notice
UNAVAILABLE_NOTICE_TICKS = 20


def run_session(
    cfg: AppConfig,
    timeline: Timeline,
    source: PositionSource,
    renderer: AnsiRenderer,
    *,
    title: str,
    until: Callable[[], bool] | None = None,
    max_ticks: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Polling loop:
    source -> position -> active line -> render on change.

    Redraws when the active line or the progress read-out changes. Stops
    when `until()` is true or after `max_ticks` polls; otherwise runs until
    interrupted.
    """
    tick_s = 1.0 / max(cfg.refresh_hz, 1.0)
    tracker = LineTracker(timeline)
    if timeline:
        lines = timeline.texts
    else:
        # active_index can't signal "empty", guard it here
        lines = [t("no_lyrics")]
    last_footer: str | None = None
    ticks = 0
    failures = 0

    while max_ticks is None or ticks < max_ticks:
        ticks += 1
        try:
            pos_ms = source.position_ms()
            dur_ms = source.duration_ms()
            playing = source.is_playing()
        except PlayerUnavailable as e:
            # briefly gone: keep the last frame; gone for longer: say so
            failures += 1
            logger.debug("Position unavailable: %s", e)
            if failures == UNAVAILABLE_NOTICE_TICKS:
                logger.warning("Player unavailable: %s", e)
                renderer.render(title, [t("player_unavailable", error=str(e))], current_idx=-1)
                tracker.reset()
                last_footer = None
            sleep(tick_s)
            continue
        failures = 0

        changed = tracker.changed_index(pos_ms)
        footer = progress_line(pos_ms, dur_ms)
        if not playing:
            footer = f"{footer}  [{t('paused')}]"

        if changed is not None or footer != last_footer:
            last_footer = footer
            current_idx = tracker.last_idx if timeline else -1
            renderer.render(title, lines, current_idx=current_idx, context_lines=cfg.context_lines, footer=footer)

        if until is not None and until():
            logger.info("%s", t("finished", title=title))
            return 0

        sleep(tick_s)
    return 0


def _with_renderer(cfg: AppConfig, body: Callable[[AnsiRenderer], int]) -> int:
    renderer = AnsiRenderer(use_alt_screen=cfg.use_alt_screen)
    renderer.enter()

    def _on_sigint(signum, frame):
        renderer.exit()
        raise KeyboardInterrupt

    prev_sigint = signal.signal(signal.SIGINT, _on_sigint)
    try:
        return body(renderer)
    except KeyboardInterrupt:
        return 130
    finally:
        signal.signal(signal.SIGINT, prev_sigint)
        renderer.exit()


def preview(cfg: AppConfig, lrc_path: Path, *, duration_ms: int | None = None, start_ms: int = 0) -> int:
    """
    Scroll a lyric file against a local clock, no audio involved.
    """
    timeline = load_timeline(lrc_path, encoding=cfg.encoding)
    if duration_ms is None:
        duration_ms = timeline.last_time_ms + cfg.tail_ms
    clock = ClockSource(duration_ms=duration_ms, start_ms=start_ms)
    clock.play()

    return _with_renderer(
        cfg,
        lambda r: run_session(cfg, timeline, clock, r, title=lrc_path.stem, until=clock.is_finished),
    )


def follow(cfg: AppConfig, lrc_path: Path, *, preferred_player: str | None) -> int:
    """
    Highlight lyrics against the position of a running MPRIS player.
    """
    from karaoke_sync.mpris.client import MprisClient

    timeline = load_timeline(lrc_path, encoding=cfg.encoding)
    try:
        client = MprisClient.pick_player(preferred=preferred_player)
        track = client.track_info()
    except (NoPlayersFound, PlayerUnavailable) as e:
        logger.error("%s: %s", t("no_mpris_players"), e)
        return 1

    logger.info("Following %s (%s)", client.service_name, track.display)
    title = track.display if (track.artist or track.title) else lrc_path.stem
    return _with_renderer(cfg, lambda r: run_session(cfg, timeline, client, r, title=title))
