from __future__ import annotations

import logging
from pathlib import Path

from .model import Timeline
from .parse import parse_timeline

logger = logging.getLogger(__name__)


def read_lyrics_text(path: Path, encoding: str = "utf-8") -> str:
    """
    Raw lyric text, or "" when the file can't be read or decoded.
    """
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read lyrics from %s: %s", path, e)
        return ""


def load_timeline(path: Path, encoding: str = "utf-8") -> Timeline:
    """
    Read and parse a lyric file. Unreadable or undecodable files give an
    empty Timeline (shown as "no lyrics"), never an exception.
    """
    timeline = parse_timeline(read_lyrics_text(path, encoding=encoding))
    logger.debug("Loaded %d timed lines from %s", len(timeline), path)
    return timeline
