"""RSS feed parser using feedparser."""

import logging
import xml.sax
from typing import Any

import feedparser
import httpx

from podgrab.feeds.models import Episode, Feed
from podgrab.utils.errors import FeedParseError, FetchError
from podgrab.utils.http import client_session

logger = logging.getLogger(__name__)


class RSSParser:
    """Fetches RSS feeds and extracts episode information."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the RSS parser.

        Args:
            client: Shared HTTP client. A temporary one is opened per fetch if omitted.
            timeout: HTTP request timeout in seconds (None = no timeout).
        """
        self.client = client
        self.timeout = timeout

    async def fetch_feed(self, url: str) -> Feed:
        """Fetch and parse an RSS feed.

        Args:
            url: Feed URL

        Returns:
            Parsed Feed

        Raises:
            FetchError: On network failure or a non-2xx response
            FeedParseError: If the body is not a well-formed feed
        """
        logger.debug("Fetching feed %s", url)
        try:
            async with client_session(self.client, self.timeout) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Failed to fetch feed {url}: {e}") from e

        if not response.is_success:
            raise FetchError(f"Failed to fetch feed {url}: HTTP status {response.status_code}")

        return self.parse_feed(response.content)

    def parse_feed(self, content: bytes | str) -> Feed:
        """Parse raw feed content.

        Args:
            content: Feed document

        Returns:
            Feed with channel title and episodes in document order

        Raises:
            FeedParseError: If the document is malformed or not a feed
        """
        # feedparser treats a str as a possible URL or filename
        if isinstance(content, str):
            content = content.encode("utf-8")
        parsed = feedparser.parse(content)

        if parsed.get("bozo") and isinstance(parsed.get("bozo_exception"), xml.sax.SAXException):
            raise FeedParseError(f"Malformed feed: {parsed.bozo_exception}")
        if not parsed.get("version"):
            raise FeedParseError("Document is not a recognized RSS feed")

        episodes = [self.extract_episode(entry) for entry in parsed.entries]
        feed = Feed(title=parsed.feed.get("title", ""), episodes=episodes)
        logger.debug("Parsed feed '%s' with %d episodes", feed.title, len(episodes))
        return feed

    def extract_episode(self, entry: Any) -> Episode:
        """Build an Episode from a feedparser entry.

        Dates stay raw here; the episode filter decides what to do with them.
        """
        media_url = ""
        enclosures = entry.get("enclosures") or []
        if enclosures:
            media_url = enclosures[0].get("href", "")

        duration = entry.get("itunes_duration")

        return Episode(
            title=entry.get("title", ""),
            pub_date=entry.get("published", ""),
            media_url=media_url,
            duration=duration if duration else None,
        )
