"""Audio download and validation for podgrab."""

from podgrab.audio.downloader import AudioDownloader, DownloadProgress
from podgrab.audio.duration import (
    DurationValidator,
    ValidationResult,
    compare_durations,
    get_audio_duration,
    parse_duration,
)

__all__ = [
    "AudioDownloader",
    "DownloadProgress",
    "DurationValidator",
    "ValidationResult",
    "compare_durations",
    "get_audio_duration",
    "parse_duration",
]
