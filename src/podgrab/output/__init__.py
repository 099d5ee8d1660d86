"""Output file naming for podgrab."""

from podgrab.output.naming import (
    DEFAULT_FILENAME_TEMPLATE,
    build_file_path,
    normalize_title,
    render_filename,
)

__all__ = [
    "DEFAULT_FILENAME_TEMPLATE",
    "build_file_path",
    "normalize_title",
    "render_filename",
]
