"""Episode selection by publish date.

Feeds declare ``<pubDate>`` in RFC 1123 form, either with a zone
abbreviation (``Mon, 02 Jan 2006 15:04:05 GMT``) or a numeric offset
(``Mon, 02 Jan 2006 15:04:05 -0700``). Episodes whose date matches neither
are skipped with a warning; episodes older than the cutoff are skipped
quietly.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from podgrab.feeds.models import Episode, Feed
from podgrab.utils.errors import DateParseError

logger = logging.getLogger(__name__)

RFC1123_LAYOUT = "%a, %d %b %Y %H:%M:%S"
RFC1123Z_LAYOUT = "%a, %d %b %Y %H:%M:%S %z"

# RFC 822 zone names; any other abbreviation is read as UTC
ZONE_OFFSETS_HOURS = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}


def _parse_rfc1123(raw: str) -> datetime:
    head, _, zone = raw.rpartition(" ")
    if not zone.isalpha():
        raise ValueError(f"zone {zone!r} is not an abbreviation")
    naive = datetime.strptime(head, RFC1123_LAYOUT)
    offset = ZONE_OFFSETS_HOURS.get(zone.upper(), 0)
    return naive.replace(tzinfo=timezone(timedelta(hours=offset)))


def parse_pub_date(raw: str) -> datetime:
    """Parse an episode publish date.

    Tries the zone-abbreviation form first, then the numeric-offset form.

    Args:
        raw: ``<pubDate>`` text

    Returns:
        Timezone-aware datetime

    Raises:
        DateParseError: If neither format matches
    """
    value = raw.strip()
    try:
        return _parse_rfc1123(value)
    except ValueError:
        pass

    try:
        return datetime.strptime(value, RFC1123Z_LAYOUT)
    except ValueError as e:
        raise DateParseError(f"Could not parse publish date {raw!r}: {e}") from e


class FilterDecision(str, Enum):
    """Outcome of evaluating one episode."""

    ACCEPTED = "accepted"
    INVALID_DATE = "invalid_date"
    BEFORE_SINCE = "before_since"


@dataclass
class FilterResult:
    """Decision for one episode, in feed order."""

    episode: Episode
    decision: FilterDecision
    error: str | None = None

    @property
    def accepted(self) -> bool:
        return self.decision is FilterDecision.ACCEPTED


class EpisodeFilter:
    """Select episodes published at or after an optional cutoff."""

    def __init__(self, since: datetime | None = None) -> None:
        self.since = since

    def evaluate(self, episode: Episode) -> FilterResult:
        """Decide whether a single episode should be downloaded.

        Accepted episodes come back carrying their parsed publish date.
        """
        try:
            published = parse_pub_date(episode.pub_date)
        except DateParseError as e:
            logger.warning("Skipping '%s': %s", episode.title, e)
            return FilterResult(episode, FilterDecision.INVALID_DATE, str(e))

        dated = episode.with_published(published)
        if self.since is not None and published < self.since:
            logger.info("Skipping '%s': published before %s", episode.title, self.since)
            return FilterResult(dated, FilterDecision.BEFORE_SINCE)

        return FilterResult(dated, FilterDecision.ACCEPTED)

    def select(self, feed: Feed) -> Iterator[FilterResult]:
        """Evaluate every episode of ``feed`` in document order."""
        for episode in feed.episodes:
            yield self.evaluate(episode)

    def accepted(self, feed: Feed) -> list[Episode]:
        """Episodes that pass the filter, with parsed publish dates."""
        return [result.episode for result in self.select(feed) if result.accepted]
