from __future__ import annotations

from pathlib import Path
import typer

from karaoke_sync.app import follow as follow_loop
from karaoke_sync.app import preview as preview_loop
from karaoke_sync.config import SUPPORTED_LANGS, load_config, save_config_lang
from karaoke_sync.i18n import set_lang, t
from karaoke_sync.logging_setup import setup_logging
from karaoke_sync.lrc.export import export_json, export_lrc, export_srt
from karaoke_sync.lrc.loader import load_timeline, read_lyrics_text
from karaoke_sync.lrc.parse import parse_timeline_with_stats


app = typer.Typer(no_args_is_help=True, add_completion=False)


def _display_config(refresh_hz: float | None, context_lines: int | None, no_alt_screen: bool):
    cfg = load_config().with_overrides(refresh_hz=refresh_hz, context_lines=context_lines)
    if no_alt_screen:
        cfg = cfg.with_overrides(use_alt_screen=False)
    set_lang(cfg.lang)
    return cfg


@app.command()
def preview(
    lrc_path: Path,
    duration: float | None = typer.Option(None, "--duration", help="Track length in seconds (default: last line + tail)"),
    start: float = typer.Option(0.0, "--start", help="Start position in seconds"),
    refresh_hz: float | None = typer.Option(None, "--refresh-hz", help="Polling frequency (Hz)"),
    context_lines: int | None = typer.Option(None, "--context", help="Lines shown above the current one"),
    no_alt_screen: bool = typer.Option(False, "--no-alt-screen", help="Do not use alternate screen buffer"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Scroll a lyric file in real time against a local clock.
    """
    cfg = _display_config(refresh_hz, context_lines, no_alt_screen)
    setup_logging(debug)
    duration_ms = int(duration * 1000) if duration is not None else None
    raise typer.Exit(code=preview_loop(cfg, lrc_path, duration_ms=duration_ms, start_ms=int(start * 1000)))


@app.command()
def follow(
    lrc_path: Path,
    player: str | None = typer.Option(None, "--player", help="MPRIS service or short name (e.g. vlc)"),
    refresh_hz: float | None = typer.Option(None, "--refresh-hz", help="Polling frequency (Hz)"),
    context_lines: int | None = typer.Option(None, "--context", help="Lines shown above the current one"),
    no_alt_screen: bool = typer.Option(False, "--no-alt-screen", help="Do not use alternate screen buffer"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    Highlight lyrics following the position of a running music player.
    """
    cfg = _display_config(refresh_hz, context_lines, no_alt_screen)
    setup_logging(debug)
    raise typer.Exit(code=follow_loop(cfg, lrc_path, preferred_player=player or cfg.preferred_player))


@app.command()
def players():
    """List available MPRIS players."""
    # dbus is only needed here and in `follow`
    from karaoke_sync.mpris.client import MprisClient

    found = MprisClient.list_players()
    if not found:
        set_lang(load_config().lang)
        typer.echo(t("no_players_listed"), err=True)
    for p in found:
        typer.echo(p)


@app.command()
def parse(lrc_path: Path):
    """Parse a lyric file and print stats."""
    text = read_lyrics_text(lrc_path, encoding=load_config().encoding)
    timeline, stats = parse_timeline_with_stats(text)
    typer.echo(f"lines_total={stats.lines_total}")
    typer.echo(f"lines_matched={stats.lines_matched}")
    typer.echo(f"lines_ignored={stats.lines_ignored}")
    typer.echo(f"entries_total={stats.entries_total}")
    if timeline:
        typer.echo(f"first_ms={timeline[0].time_ms}")
        typer.echo(f"last_ms={timeline.last_time_ms}")


@app.command()
def export(
    lrc_path: Path,
    fmt: str = typer.Option("srt", "--format", case_sensitive=False, help="lrc|srt|json"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
):
    """Export the parsed timeline to SRT/JSON/LRC (sorted, normalized)."""
    timeline = load_timeline(lrc_path, encoding=load_config().encoding)
    fmt_l = fmt.lower()
    if fmt_l == "json":
        data = export_json(timeline)
    elif fmt_l == "lrc":
        data = export_lrc(timeline)
    elif fmt_l == "srt":
        data = export_srt(timeline)
    else:
        raise typer.BadParameter("format must be one of: lrc, srt, json")

    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


@app.command()
def config(
    lang: str = typer.Option(..., "--lang", help="Interface language: en|pt"),
):
    """Persist interface settings."""
    if lang.upper() not in SUPPORTED_LANGS:
        raise typer.BadParameter("lang must be one of: en, pt")
    save_config_lang(lang)
    set_lang(lang)
    typer.echo(t("lang_saved", lang=lang.upper()))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
