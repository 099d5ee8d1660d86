"""Post-download duration check against the feed's ``itunes:duration``.

The actual length of a downloaded file is measured with ffprobe and compared
with the declared length. A file passes when it is within 5% of the declared
duration.
"""

import asyncio
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from podgrab.utils.errors import ToolMissingError, ValidationError

logger = logging.getLogger(__name__)

FFPROBE = "ffprobe"
TOLERANCE_RATIO = 0.05


@dataclass(frozen=True)
class ValidationResult:
    """Expected vs. actual duration of one downloaded file."""

    expected_seconds: float | None
    actual_seconds: float
    within_tolerance: bool

    @property
    def skipped(self) -> bool:
        """True when the feed declared no duration to compare against."""
        return self.expected_seconds is None

    @property
    def tolerance_seconds(self) -> float:
        if self.expected_seconds is None:
            return 0.0
        return self.expected_seconds * TOLERANCE_RATIO


def parse_duration(value: str) -> float:
    """Parse an iTunes duration string to total seconds.

    Supports ``SS``, ``MM:SS`` and ``HH:MM:SS``; components may be fractional.

    Raises:
        ValidationError: If the string is in none of these forms

    Example:
        >>> parse_duration("01:23:45")
        5025.0
        >>> parse_duration("10:00")
        600.0
        >>> parse_duration("90")
        90.0
    """
    parts = value.strip().split(":")
    if len(parts) > 3:
        raise ValidationError(f"Invalid duration format: {value!r}")

    try:
        numbers = [float(part) for part in parts]
    except ValueError as e:
        raise ValidationError(f"Invalid duration format: {value!r}") from e

    seconds = 0.0
    for number in numbers:
        seconds = seconds * 60 + number
    return seconds


def get_audio_duration(audio_path: Path, ffprobe: str = FFPROBE) -> float:
    """Get audio duration in seconds using ffprobe.

    Args:
        audio_path: Path to audio file
        ffprobe: ffprobe executable

    Returns:
        Duration in seconds

    Raises:
        ToolMissingError: If ffprobe is not installed
        ValidationError: If ffprobe fails or prints something unexpected
    """
    try:
        result = subprocess.run(
            [
                ffprobe,
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "default=noprint_wrappers=1:nokey=1",
                str(audio_path),
            ],
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise ToolMissingError(ffprobe) from e
    except subprocess.CalledProcessError as e:
        raise ValidationError(f"ffprobe failed: {e.stderr.strip()}") from e

    try:
        return float(result.stdout.strip())
    except ValueError as e:
        raise ValidationError(f"Could not parse duration: {e}") from e


def compare_durations(expected: str | None, actual_seconds: float) -> ValidationResult:
    """Compare a probed duration with the declared one.

    A missing, blank or zero declared duration yields a skipped result.
    """
    if expected is None or not expected.strip():
        return ValidationResult(None, actual_seconds, True)

    expected_seconds = parse_duration(expected)
    if expected_seconds == 0:
        return ValidationResult(None, actual_seconds, True)

    tolerance = expected_seconds * TOLERANCE_RATIO
    within = abs(actual_seconds - expected_seconds) <= tolerance
    return ValidationResult(expected_seconds, actual_seconds, within)


class DurationValidator:
    """Checks downloaded files against declared durations."""

    def __init__(self, ffprobe: str = FFPROBE) -> None:
        self.ffprobe = ffprobe

    def ensure_available(self) -> None:
        """Raise ToolMissingError unless ffprobe is on PATH."""
        if shutil.which(self.ffprobe) is None:
            raise ToolMissingError(self.ffprobe)

    async def probe(self, audio_path: Path) -> float:
        """Measure ``audio_path`` without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, get_audio_duration, audio_path, self.ffprobe)

    async def validate(self, audio_path: Path, expected: str | None) -> ValidationResult:
        """Validate a downloaded file.

        Args:
            audio_path: Downloaded file
            expected: Declared duration from the feed, if any

        Returns:
            ValidationResult (``skipped`` when nothing was declared)

        Raises:
            ToolMissingError: If ffprobe is not installed
            ValidationError: If probing fails or the duration is outside tolerance
        """
        self.ensure_available()
        actual = await self.probe(audio_path)
        result = compare_durations(expected, actual)

        if result.skipped:
            logger.info("No declared duration for %s, skipping validation", audio_path)
            return result

        if not result.within_tolerance:
            raise ValidationError(
                f"Duration mismatch for {audio_path.name}: "
                f"expected {result.expected_seconds:.1f}s, actual {actual:.1f}s "
                f"(tolerance {result.tolerance_seconds:.1f}s)",
                result=result,
            )

        logger.debug(
            "Duration ok for %s: expected %.1fs, actual %.1fs",
            audio_path,
            result.expected_seconds,
            actual,
        )
        return result
