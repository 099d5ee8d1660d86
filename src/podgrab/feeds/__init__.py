"""Feed retrieval, parsing and episode selection for podgrab."""

from podgrab.feeds.filter import EpisodeFilter, FilterDecision, FilterResult, parse_pub_date
from podgrab.feeds.models import Episode, Feed
from podgrab.feeds.parser import RSSParser

__all__ = [
    "Episode",
    "Feed",
    "RSSParser",
    "EpisodeFilter",
    "FilterDecision",
    "FilterResult",
    "parse_pub_date",
]
