"""API route handlers."""

from league_luck.api.routes import luck

__all__ = ["luck"]
