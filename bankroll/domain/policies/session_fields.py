"""Required-field policies for sessions."""

from bankroll.domain.models import LiveSession, OnlineSession


def _has_game_details(session: LiveSession | OnlineSession) -> bool:
    return (
        bool((session.game_type or "").strip())
        and session.small_blind > 0
        and session.big_blind > 0
    )


def has_required_live_fields(session: LiveSession) -> bool:
    """Return True when a live session names its location and game."""
    return bool((session.location or "").strip()) and _has_game_details(
        session
    )


def has_required_online_fields(session: OnlineSession) -> bool:
    """Return True when an online session names its platform and game."""
    return session.platform_id is not None and _has_game_details(session)


__all__ = ["has_required_live_fields", "has_required_online_fields"]
