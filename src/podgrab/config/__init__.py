"""Configuration loading for podgrab."""

from podgrab.config.manager import ConfigManager
from podgrab.config.schema import BatchConfig, Task, parse_since

__all__ = ["ConfigManager", "BatchConfig", "Task", "parse_since"]
