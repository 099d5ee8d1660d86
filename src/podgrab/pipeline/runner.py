"""Task runner: fetch → filter → name → download → validate.

Each task runs its episodes sequentially in feed order. Several tasks run
concurrently on one event loop and are joined with ``asyncio.gather``; a
failure in one task never affects another.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from podgrab.audio.downloader import AudioDownloader
from podgrab.audio.duration import DurationValidator
from podgrab.config.schema import Task
from podgrab.feeds.filter import EpisodeFilter, FilterDecision, FilterResult
from podgrab.feeds.models import Feed
from podgrab.feeds.parser import RSSParser
from podgrab.output.naming import build_file_path
from podgrab.pipeline.models import EpisodeResult, EpisodeStatus, TaskResult, TaskStage
from podgrab.utils.errors import (
    DownloadError,
    FeedError,
    TaskError,
    ToolMissingError,
    ValidationError,
)
from podgrab.utils.http import create_client

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict[str, Any]], None]


class TaskRunner:
    """Runs download tasks.

    Example:
        >>> runner = TaskRunner(validate=True)
        >>> results = asyncio.run(runner.run_all(tasks))
        >>> for error in collect_errors(results):
        ...     print(error)
    """

    def __init__(
        self,
        validate: bool = False,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        validator: DurationValidator | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            validate: Check downloaded durations against the feed
            timeout: Per-request HTTP timeout in seconds (None = no timeout)
            transport: Optional httpx transport override
            validator: Duration validator (a default ffprobe one if omitted)
            progress_callback: Receives ``(step_name, step_data)`` events
        """
        self.validate = validate
        self.timeout = timeout
        self.transport = transport
        self.validator = validator or DurationValidator()
        self.progress_callback = progress_callback

    def _emit(self, step_name: str, **step_data: Any) -> None:
        if self.progress_callback:
            self.progress_callback(step_name, step_data)

    async def run_all(self, tasks: Sequence[Task]) -> list[TaskResult]:
        """Run every task concurrently and wait for all of them.

        Returns:
            One TaskResult per task, in the order the tasks were given
        """
        total = len(tasks)
        results = await asyncio.gather(
            *(self.run_task(task, index, total) for index, task in enumerate(tasks, 1))
        )
        return list(results)

    async def run_task(self, task: Task, index: int = 1, total: int = 1) -> TaskResult:
        """Run one task to completion.

        Task-level failures (directory creation, fetch, parse) are recorded
        on the result rather than raised.
        """
        result = TaskResult(index=index, task=task)
        self._emit("task_start", index=index, total=total, url=task.url)

        try:
            await self._execute(task, result)
        except TaskError as e:
            result.error = e
        except Exception as e:
            logger.exception("Unexpected error in task %d", index)
            error = TaskError(index, f"unexpected error: {e}")
            error.__cause__ = e
            result.error = error

        if result.error is not None:
            result.stage = TaskStage.FAILED
            logger.error("%s", result.error)
            self._emit("task_failed", index=index, error=str(result.error))
        else:
            result.stage = TaskStage.DONE
            self._emit(
                "task_complete",
                index=index,
                downloaded=len(result.downloaded),
                skipped=result.count(EpisodeStatus.SKIPPED),
                failed=result.count(EpisodeStatus.FAILED),
            )
        return result

    async def _execute(self, task: Task, result: TaskResult) -> None:
        try:
            task.destination.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TaskError(
                result.index, f"could not create directory {task.destination}: {e}"
            ) from e

        async with create_client(timeout=self.timeout, transport=self.transport) as client:
            result.stage = TaskStage.FETCHING
            try:
                feed = await RSSParser(client).fetch_feed(task.url)
            except FeedError as e:
                raise TaskError(result.index, str(e)) from e

            result.channel_title = feed.title
            self._emit(
                "feed_fetched", index=result.index, title=feed.title, episodes=len(feed.episodes)
            )

            for decision in EpisodeFilter(task.since).select(feed):
                result.stage = TaskStage.FILTERING
                episode_result = await self._process_episode(
                    task, result, feed, decision, client
                )
                result.episodes.append(episode_result)

    async def _process_episode(
        self,
        task: Task,
        result: TaskResult,
        feed: Feed,
        decision: FilterResult,
        client: httpx.AsyncClient,
    ) -> EpisodeResult:
        index = result.index
        episode = decision.episode

        if decision.decision is FilterDecision.INVALID_DATE:
            self._emit(
                "episode_invalid_date", index=index, title=episode.title, error=decision.error
            )
            return EpisodeResult(episode.title, EpisodeStatus.FAILED, error=decision.error)

        if decision.decision is FilterDecision.BEFORE_SINCE:
            self._emit("episode_skipped", index=index, title=episode.title)
            return EpisodeResult(episode.title, EpisodeStatus.SKIPPED)

        assert episode.published is not None
        result.stage = TaskStage.TEMPLATING
        path = build_file_path(
            task.destination, task.format, feed.title, episode.title, episode.published
        )

        result.stage = TaskStage.DOWNLOADING
        self._emit("download_start", index=index, title=episode.title, url=episode.media_url)
        downloader = AudioDownloader(
            client,
            progress_callback=lambda progress: self._emit(
                "download_progress", index=index, title=episode.title, progress=progress
            ),
        )
        try:
            if not episode.media_url:
                raise DownloadError(f"Episode '{episode.title}' has no enclosure URL")
            await downloader.download(episode.media_url, path)
        except DownloadError as e:
            logger.warning("Download failed for '%s': %s", episode.title, e)
            self._emit("download_failed", index=index, title=episode.title, error=str(e))
            return EpisodeResult(episode.title, EpisodeStatus.FAILED, path=path, error=str(e))

        self._emit("download_complete", index=index, title=episode.title, path=path)

        if not self.validate:
            return EpisodeResult(episode.title, EpisodeStatus.DOWNLOADED, path=path)

        result.stage = TaskStage.VALIDATING
        try:
            validation = await self.validator.validate(path, episode.duration)
        except (ValidationError, ToolMissingError) as e:
            logger.warning("Validation failed for %s: %s", path, e)
            self._emit("validation_failed", index=index, path=path, error=str(e))
            return EpisodeResult(
                episode.title,
                EpisodeStatus.VALIDATION_FAILED,
                path=path,
                error=str(e),
                validation=e.result if isinstance(e, ValidationError) else None,
            )

        if validation.skipped:
            self._emit("validation_skipped", index=index, path=path)
        else:
            self._emit(
                "validation_passed",
                index=index,
                path=path,
                expected=validation.expected_seconds,
                actual=validation.actual_seconds,
            )
        return EpisodeResult(
            episode.title, EpisodeStatus.DOWNLOADED, path=path, validation=validation
        )


def collect_errors(results: Sequence[TaskResult]) -> list[TaskError]:
    """Task-level errors from a finished run, ordered by task index."""
    return [result.error for result in results if result.error is not None]
