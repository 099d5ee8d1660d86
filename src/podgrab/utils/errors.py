"""Custom exceptions for podgrab."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from podgrab.audio.duration import ValidationResult


class PodgrabError(Exception):
    """Base exception for all podgrab errors."""

    pass


class ConfigError(PodgrabError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    pass


class UnsupportedVersionError(ConfigError):
    """Configuration declares an apiVersion podgrab does not understand."""

    def __init__(self, version: str | None, supported: str) -> None:
        self.version = version
        self.supported = supported
        super().__init__(
            f"Unsupported apiVersion: {version!r} (expected {supported!r})"
        )


class TaskError(PodgrabError):
    """A single task failed at a task-level stage.

    Sibling tasks keep running; the runner collects these after the join.
    """

    def __init__(self, index: int, message: str) -> None:
        self.index = index
        super().__init__(f"Task {index} failed: {message}")


class FeedError(PodgrabError):
    """Feed retrieval and parsing errors."""

    pass


class FetchError(FeedError):
    """Network failure or non-success status while fetching a feed."""

    pass


class FeedParseError(FeedError):
    """RSS feed parsing errors."""

    pass


class DateParseError(FeedError):
    """Episode publish date in neither accepted format."""

    pass


class DownloadError(PodgrabError):
    """Media download failed (network, HTTP status or local file)."""

    pass


class ToolMissingError(PodgrabError):
    """Required external program is not installed."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"{tool} not found - install ffmpeg")


class ValidationError(PodgrabError):
    """Downloaded file failed post-download validation."""

    def __init__(self, message: str, result: ValidationResult | None = None) -> None:
        self.result = result
        super().__init__(message)
