class MprisError(RuntimeError):
    """Position source backed by an MPRIS player failed."""


class NoPlayersFound(MprisError):
    """No (matching) player on the session bus to follow."""


class PlayerUnavailable(MprisError):
    """The followed player stopped answering (quit, crashed, bus hiccup)."""
