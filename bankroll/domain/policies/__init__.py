"""Domain policies package."""

from .session_fields import has_required_live_fields, has_required_online_fields

__all__ = ["has_required_live_fields", "has_required_online_fields"]
