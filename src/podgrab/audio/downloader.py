"""Streaming audio downloader using httpx."""

import logging
from collections.abc import Callable
from pathlib import Path

import aiofiles
import httpx
from pydantic import BaseModel, Field

from podgrab.utils.errors import DownloadError
from podgrab.utils.http import client_session

logger = logging.getLogger(__name__)


class DownloadProgress(BaseModel):
    """Progress information for audio download."""

    status: str = Field(..., description="Current download status")
    downloaded_bytes: int = Field(default=0, ge=0, description="Bytes downloaded so far")
    total_bytes: int | None = Field(
        default=None, ge=0, description="Total bytes to download (if known)"
    )

    @property
    def percentage(self) -> float | None:
        """Calculate download percentage if total is known."""
        if self.total_bytes and self.total_bytes > 0:
            return (self.downloaded_bytes / self.total_bytes) * 100
        return None


class AudioDownloader:
    """Stream enclosure URLs straight to disk.

    The target file is created (or truncated) before the first chunk is
    written. A failure partway through leaves the partial file in place.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        progress_callback: Callable[[DownloadProgress], None] | None = None,
    ):
        """Initialize audio downloader.

        Args:
            client: Shared HTTP client. A temporary one is opened per download if omitted.
            timeout: HTTP request timeout in seconds (None = no timeout)
            progress_callback: Optional callback for progress updates
        """
        self.client = client
        self.timeout = timeout
        self.progress_callback = progress_callback

    def _report(self, status: str, downloaded: int, total: int | None) -> None:
        if not self.progress_callback:
            return
        self.progress_callback(
            DownloadProgress(status=status, downloaded_bytes=downloaded, total_bytes=total)
        )

    async def download(self, url: str, output_path: Path) -> Path:
        """Download ``url`` to ``output_path``.

        Args:
            url: Media URL
            output_path: Destination file (overwritten if it exists)

        Returns:
            Path to the downloaded file

        Raises:
            DownloadError: On network failure, non-2xx status, or file write failure
        """
        logger.debug("Downloading %s -> %s", url, output_path)
        try:
            async with client_session(self.client, self.timeout) as client:
                async with client.stream("GET", url) as response:
                    if not response.is_success:
                        raise DownloadError(
                            f"Failed to download {url}: HTTP status {response.status_code}"
                        )

                    length = response.headers.get("Content-Length")
                    total = int(length) if length and length.isdigit() else None
                    downloaded = 0

                    async with aiofiles.open(output_path, "wb") as f:
                        async for chunk in response.aiter_bytes():
                            await f.write(chunk)
                            downloaded += len(chunk)
                            self._report("downloading", downloaded, total)

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DownloadError(f"Failed to download {url}: {e}") from e
        except OSError as e:
            raise DownloadError(f"Failed to write {output_path}: {e}") from e

        self._report("finished", downloaded, total)
        logger.debug("Wrote %d bytes to %s", downloaded, output_path)
        return output_path
