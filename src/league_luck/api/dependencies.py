"""
API Dependencies

Shared dependencies for FastAPI route handlers including
client management and Sleeper history loading.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Path, Query

from league_luck.clients.sleeper import SleeperAPIError, SleeperClient, SleeperHistoryLoader
from league_luck.config import Settings, get_settings
from league_luck.models import LeagueHistory

logger = logging.getLogger(__name__)


class ClientManager:
    """
    Manages SleeperClient lifecycle for the application.

    Creates a single client instance that can be reused across requests.
    """

    _client: SleeperClient | None = None

    @classmethod
    async def get_client(cls) -> SleeperClient:
        """Get or create the SleeperClient instance."""
        if cls._client is None:
            cls._client = SleeperClient()
            await cls._client.__aenter__()
        return cls._client

    @classmethod
    async def close_client(cls) -> None:
        """Close the SleeperClient instance."""
        if cls._client is not None:
            await cls._client.__aexit__(None, None, None)
            cls._client = None


async def get_sleeper_client() -> SleeperClient:
    """Dependency to get the SleeperClient."""
    return await ClientManager.get_client()


def get_include_playoffs(
    settings: Annotated[Settings, Depends(get_settings)],
    include_playoffs: Annotated[
        bool | None,
        Query(description="Count playoff weeks (default from settings)"),
    ] = None,
) -> bool:
    """Dependency resolving the playoff filter against the configured default."""
    if include_playoffs is None:
        return settings.include_playoffs
    return include_playoffs


MaxSeasonsQuery = Annotated[
    int | None,
    Query(description="Number of seasons to load, most recent first", ge=1, le=30),
]


async def load_sleeper_history(
    league_id: Annotated[str, Path(description="Most recent Sleeper league ID")],
    client: Annotated[SleeperClient, Depends(get_sleeper_client)],
    max_seasons: MaxSeasonsQuery = None,
) -> LeagueHistory:
    """
    Dependency to load a league's history from Sleeper.

    Raises HTTPException 404 if the league is not found, 502 on other
    Sleeper failures.
    """
    loader = SleeperHistoryLoader(client)
    try:
        return await loader.load(league_id, max_seasons=max_seasons)
    except SleeperAPIError as e:
        logger.error("Failed to load league %s: %s", league_id, e.message)
        if e.status_code == 404:
            raise HTTPException(
                status_code=404, detail=f"League not found: {league_id}"
            ) from e
        raise HTTPException(
            status_code=502,
            detail=f"Sleeper request failed for league {league_id}: {e.message}",
        ) from e


# Type aliases for cleaner route signatures
SleeperHistoryDep = Annotated[LeagueHistory, Depends(load_sleeper_history)]
IncludePlayoffsQuery = Annotated[bool, Depends(get_include_playoffs)]
