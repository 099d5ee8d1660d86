"""Shared fixtures for podgrab tests."""

import logging
from collections.abc import Callable, Iterator

import httpx
import pytest

FEED_URL = "https://feeds.example.com/my-show.xml"

SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">
  <channel>
    <title>My Show</title>
    <link>https://example.com</link>
    <description>A test podcast</description>
    <item>
      <title>Ep 2</title>
      <pubDate>Fri, 05 Jan 2024 10:00:00 GMT</pubDate>
      <enclosure url="https://cdn.example.com/ep2.mp3" type="audio/mpeg" length="9"/>
      <itunes:duration>10:00</itunes:duration>
    </item>
    <item>
      <title>Ep 1</title>
      <pubDate>Mon, 18 Dec 2023 08:30:00 +0000</pubDate>
      <enclosure url="https://cdn.example.com/ep1.mp3" type="audio/mpeg" length="9"/>
    </item>
  </channel>
</rss>
"""


def make_rss(channel: str, items: list[dict[str, str]]) -> bytes:
    """Build a small RSS document.

    Each item dict may hold ``title``, ``pub_date``, ``url`` and ``duration``.
    """
    parts = []
    for item in items:
        duration = item.get("duration")
        parts.append(
            "<item>"
            f"<title>{item['title']}</title>"
            f"<pubDate>{item['pub_date']}</pubDate>"
            f'<enclosure url="{item["url"]}" type="audio/mpeg"/>'
            + (f"<itunes:duration>{duration}</itunes:duration>" if duration else "")
            + "</item>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">'
        f"<channel><title>{channel}</title>{''.join(parts)}</channel></rss>"
    ).encode("utf-8")


Route = bytes | int | Exception | Callable[[httpx.Request], httpx.Response]


def make_transport(routes: dict[str, Route]) -> httpx.MockTransport:
    """Fake HTTP server.

    Values are response bodies (200), bare status codes, exceptions to raise,
    or handler callables. Unknown URLs answer 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            return httpx.Response(route)
        if isinstance(route, bytes):
            return httpx.Response(200, content=route)
        return route(request)

    return httpx.MockTransport(handler)


@pytest.fixture
def feed_url() -> str:
    return FEED_URL


@pytest.fixture
def rss_factory() -> Callable[[str, list[dict[str, str]]], bytes]:
    return make_rss


@pytest.fixture
def transport_factory() -> Callable[[dict[str, Route]], httpx.MockTransport]:
    return make_transport


@pytest.fixture
def sample_rss() -> bytes:
    """Two-episode feed: one in 2024 (GMT), one in 2023 (numeric zone)."""
    return SAMPLE_RSS.encode("utf-8")


@pytest.fixture
def sample_routes(sample_rss: bytes) -> dict[str, Route]:
    """Routes serving the sample feed and both enclosures."""
    return {
        FEED_URL: sample_rss,
        "https://cdn.example.com/ep2.mp3": b"episode 2",
        "https://cdn.example.com/ep1.mp3": b"episode 1",
    }


@pytest.fixture
def sample_config_dict() -> dict:
    """Batch configuration with one fully specified and one minimal task."""
    return {
        "apiVersion": "v1",
        "tasks": [
            {
                "url": FEED_URL,
                "destination": "podcasts/my-show",
                "since": "2024-01-01T00:00:00Z",
                "format": "{date}-{episode}.mp3",
            },
            {"url": "https://feeds.example.com/other.xml"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_podgrab_logging() -> Iterator[None]:
    """Drop handlers installed by setup_logging so tests don't leak streams."""
    yield
    logger = logging.getLogger("podgrab")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
