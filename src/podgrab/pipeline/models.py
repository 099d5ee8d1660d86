"""Result models for task execution."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from podgrab.audio.duration import ValidationResult
from podgrab.config.schema import Task
from podgrab.utils.errors import TaskError


class TaskStage(str, Enum):
    """Where a task is in its run.

    The stages from ``FILTERING`` to ``VALIDATING`` repeat for each episode
    in feed order.
    """

    PENDING = "pending"
    FETCHING = "fetching"
    FILTERING = "filtering"
    TEMPLATING = "templating"
    DOWNLOADING = "downloading"
    VALIDATING = "validating"
    DONE = "done"
    FAILED = "failed"


class EpisodeStatus(str, Enum):
    """Outcome for one feed item."""

    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"
    VALIDATION_FAILED = "validation_failed"


@dataclass
class EpisodeResult:
    """Result of processing a single episode."""

    title: str
    status: EpisodeStatus
    path: Path | None = None
    error: str | None = None
    validation: ValidationResult | None = None


@dataclass
class TaskResult:
    """Result of running one task. ``index`` is 1-based."""

    index: int
    task: Task
    stage: TaskStage = TaskStage.PENDING
    channel_title: str | None = None
    episodes: list[EpisodeResult] = field(default_factory=list)
    error: TaskError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def count(self, status: EpisodeStatus) -> int:
        return sum(1 for episode in self.episodes if episode.status is status)

    @property
    def downloaded(self) -> list[EpisodeResult]:
        """Episodes written to disk, including ones that failed validation."""
        return [
            episode
            for episode in self.episodes
            if episode.status in (EpisodeStatus.DOWNLOADED, EpisodeStatus.VALIDATION_FAILED)
        ]
