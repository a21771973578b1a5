"""External API clients."""

from league_luck.clients.sleeper import SleeperAPIError, SleeperClient, SleeperHistoryLoader

__all__ = ["SleeperClient", "SleeperAPIError", "SleeperHistoryLoader"]
