"""League luck: all-play expected wins, luck index and schedule strength."""

__version__ = "0.1.0"
