from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import dbus

from .errors import NoPlayersFound, PlayerUnavailable

logger = logging.getLogger(__name__)

_PLAYER_IFACE = "org.mpris.MediaPlayer2.Player"
_SERVICE_PREFIX = "org.mpris.MediaPlayer2."


@dataclass(frozen=True, slots=True)
class TrackInfo:
    title: str
    artist: str
    length_ms: int

    @property
    def display(self) -> str:
        if self.artist and self.title:
            return f"{self.artist} - {self.title}"
        return self.title or self.artist or "Unknown track"


def _to_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:
        return ""


def _join_artist(value: Any) -> str:
    if isinstance(value, (list, tuple, dbus.Array)):
        return ", ".join(_to_str(x) for x in value if _to_str(x))
    return _to_str(value)


def _us_to_ms(value: Any) -> int:
    try:
        return max(int(value) // 1000, 0)
    except (TypeError, ValueError):
        return 0


class MprisClient:
    """
    Read-only position source following an external MPRIS player.
    Never issues transport commands (play/pause/seek).
    """

    def __init__(self, service_name: str):
        self.service_name = service_name
        self._bus = dbus.SessionBus()
        self._obj = self._bus.get_object(service_name, "/org/mpris/MediaPlayer2")
        self._props = dbus.Interface(self._obj, "org.freedesktop.DBus.Properties")

    @staticmethod
    def list_players() -> list[str]:
        try:
            bus = dbus.SessionBus()
            return [s for s in bus.list_names() if s.startswith(_SERVICE_PREFIX)]
        except dbus.DBusException as e:
            # no session bus (CI, containers): nothing to follow
            logger.debug("Unable to connect to D-Bus session bus: %s", e)
            return []

    @staticmethod
    def pick_player(preferred: str | None = None) -> "MprisClient":
        players = MprisClient.list_players()
        if not players:
            raise NoPlayersFound("No active MPRIS players")

        if preferred:
            # short names like "vlc" are accepted
            for s in players:
                if s == preferred or s.endswith("." + preferred):
                    return MprisClient(s)
            logger.warning("Preferred player '%s' not found, falling back", preferred)

        for s in players:
            try:
                c = MprisClient(s)
                if c.is_playing():
                    return c
            except (dbus.DBusException, PlayerUnavailable) as e:
                logger.debug("Skipping player %s: %s", s, e)
                continue

        return MprisClient(players[0])

    def _get(self, prop: str) -> Any:
        try:
            return self._props.Get(_PLAYER_IFACE, prop)
        except dbus.DBusException as e:
            raise PlayerUnavailable(str(e)) from e

    def playback_status(self) -> str:
        return _to_str(self._get("PlaybackStatus"))

    def is_playing(self) -> bool:
        return self.playback_status().lower() == "playing"

    def metadata(self) -> dict[str, Any]:
        return dict(self._get("Metadata"))

    def position_ms(self) -> int:
        """
        MPRIS Position is microseconds.
        """
        return _us_to_ms(self._get("Position"))

    def duration_ms(self) -> int:
        # mpris:length is optional; 0 means unknown
        return _us_to_ms(self.metadata().get("mpris:length", 0))

    def track_info(self) -> TrackInfo:
        md = self.metadata()
        return TrackInfo(
            title=_to_str(md.get("xesam:title", "")),
            artist=_join_artist(md.get("xesam:artist", [])),
            length_ms=_us_to_ms(md.get("mpris:length", 0)),
        )
