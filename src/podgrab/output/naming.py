"""Destination filenames rendered from a template.

Templates use three placeholders: ``{channel}``, ``{date}`` (``YYYYMMDD``)
and ``{episode}``. Replacement is plain sequential ``str.replace``, so a
channel title that itself contains ``{date}`` or ``{episode}`` is expanded
again by the later steps.
"""

from datetime import datetime
from pathlib import Path

DEFAULT_FILENAME_TEMPLATE = "{channel}-{date}-{episode}.mp3"

FULLWIDTH_SPACE = "　"


def normalize_title(title: str) -> str:
    """Replace ASCII and full-width spaces with underscores."""
    return title.replace(" ", "_").replace(FULLWIDTH_SPACE, "_")


def render_filename(
    template: str,
    channel_title: str,
    episode_title: str,
    published: datetime,
) -> str:
    """Render a filename from the template.

    Args:
        template: Filename template
        channel_title: Feed channel title
        episode_title: Episode title
        published: Parsed publish date

    Returns:
        Rendered filename

    Example:
        >>> render_filename(
        ...     "{channel}-{date}-{episode}.mp3",
        ...     "My Show",
        ...     "Ep 1",
        ...     datetime(2024, 1, 5),
        ... )
        'My_Show-20240105-Ep_1.mp3'
    """
    filename = template
    filename = filename.replace("{channel}", normalize_title(channel_title))
    filename = filename.replace("{date}", published.strftime("%Y%m%d"))
    filename = filename.replace("{episode}", normalize_title(episode_title))
    return filename


def build_file_path(
    destination: Path,
    template: str,
    channel_title: str,
    episode_title: str,
    published: datetime,
) -> Path:
    """Join the destination directory with the rendered filename."""
    return destination / render_filename(template, channel_title, episode_title, published)
