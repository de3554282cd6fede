from __future__ import annotations

import json
from dataclasses import dataclass, replace
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

SUPPORTED_LANGS = ("EN", "PT")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "karaoke-sync"
    return Path.home() / ".config" / "karaoke-sync"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Locale
    lang: str

    # Lyric files
    encoding: str

    # Position sources
    preferred_player: str | None
    tail_ms: int  # preview keeps running this long after the last line

    # Rendering
    refresh_hz: float
    context_lines: int  # lines above current
    use_alt_screen: bool

    def with_overrides(self, **changes: object) -> "AppConfig":
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_config() -> AppConfig:
    refresh_hz = float(os.getenv("KARAOKE_SYNC_REFRESH_HZ", "20.0"))
    context_lines = int(os.getenv("KARAOKE_SYNC_CONTEXT_LINES", "2"))
    use_alt_screen = os.getenv("KARAOKE_SYNC_ALT_SCREEN", "1") not in ("0", "false", "False")

    config_dir = _config_dir()

    return AppConfig(
        config_dir=config_dir,
        lang=_load_lang(config_dir),
        encoding=os.getenv("KARAOKE_SYNC_ENCODING", "utf-8"),
        preferred_player=os.getenv("KARAOKE_SYNC_PLAYER") or None,
        tail_ms=int(os.getenv("KARAOKE_SYNC_TAIL_MS", "3000")),
        refresh_hz=refresh_hz,
        context_lines=context_lines,
        use_alt_screen=use_alt_screen,
    )


def _load_lang(config_dir: Path) -> str:
    # Priority: config.json → KARAOKE_SYNC_LANG → "EN"
    cfg_path = config_dir / "config.json"
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
            raw = (data.get("lang") or "en").upper()
            if raw in SUPPORTED_LANGS:
                return raw
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Ignoring unreadable %s: %s", cfg_path, e)
    env_lang = os.getenv("KARAOKE_SYNC_LANG")
    if env_lang and env_lang.upper() in SUPPORTED_LANGS:
        return env_lang.upper()
    return "EN"


def save_config_lang(lang: str) -> None:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, str] = {}
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Overwriting malformed %s", cfg_path)
    data["lang"] = lang.upper()
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
