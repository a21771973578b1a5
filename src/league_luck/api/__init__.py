"""API package - FastAPI routes and dependencies."""

from league_luck.api.dependencies import (
    ClientManager,
    IncludePlayoffsQuery,
    MaxSeasonsQuery,
    get_sleeper_client,
    load_sleeper_history,
)

__all__ = [
    "ClientManager",
    "get_sleeper_client",
    "load_sleeper_history",
    "IncludePlayoffsQuery",
    "MaxSeasonsQuery",
]
