"""Task execution pipeline for podgrab."""

from podgrab.pipeline.models import EpisodeResult, EpisodeStatus, TaskResult, TaskStage
from podgrab.pipeline.runner import ProgressCallback, TaskRunner, collect_errors

__all__ = [
    "TaskRunner",
    "TaskResult",
    "TaskStage",
    "EpisodeResult",
    "EpisodeStatus",
    "ProgressCallback",
    "collect_errors",
]
