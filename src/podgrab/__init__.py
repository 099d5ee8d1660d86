"""podgrab - download podcast episodes from RSS feeds."""

__version__ = "0.1.0"
