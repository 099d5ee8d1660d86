"""Utility functions and helpers for podgrab."""

from podgrab.utils.errors import (
    ConfigError,
    ConfigNotFoundError,
    DateParseError,
    DownloadError,
    FeedError,
    FeedParseError,
    FetchError,
    InvalidConfigError,
    PodgrabError,
    TaskError,
    ToolMissingError,
    UnsupportedVersionError,
    ValidationError,
)

__all__ = [
    "PodgrabError",
    "ConfigError",
    "InvalidConfigError",
    "ConfigNotFoundError",
    "UnsupportedVersionError",
    "TaskError",
    "FeedError",
    "FetchError",
    "FeedParseError",
    "DateParseError",
    "DownloadError",
    "ToolMissingError",
    "ValidationError",
]
