"""CLI entry point for podgrab."""

import asyncio
import sys
from pathlib import Path
from typing import Any

import pydantic
import typer
from rich.console import Console
from rich.markup import escape

from podgrab.config.logging import setup_logging
from podgrab.config.manager import ConfigManager
from podgrab.config.schema import Task
from podgrab.output.naming import DEFAULT_FILENAME_TEMPLATE
from podgrab.pipeline import TaskRunner, collect_errors
from podgrab.utils.errors import ConfigError

app = typer.Typer(
    name="podgrab",
    help="Download podcast episodes from RSS feeds",
    add_completion=False,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        from podgrab import __version__

        console.print(f"[bold cyan]podgrab[/bold cyan] v{__version__}")
        raise typer.Exit()


def _make_progress_handler(batch: bool):
    """Build the progress callback that prints pipeline events."""

    def handle_progress(step_name: str, step_data: dict[str, Any]) -> None:
        prefix = f"[dim]\\[task {step_data['index']}][/dim] " if batch else ""

        if step_name == "task_start":
            if batch:
                console.print(
                    f"Running task {step_data['index']}/{step_data['total']}: "
                    f"{escape(step_data['url'])}"
                )

        elif step_name == "feed_fetched":
            console.print(
                f"{prefix}[bold]{escape(step_data['title'])}[/bold] "
                f"({step_data['episodes']} episodes)"
            )

        elif step_name == "episode_invalid_date":
            console.print(
                f"{prefix}[yellow]⚠[/yellow] Skipping '{escape(step_data['title'])}': "
                f"{escape(step_data['error'])}"
            )

        elif step_name == "episode_skipped":
            console.print(
                f"{prefix}[dim]Skipping '{escape(step_data['title'])}' "
                "(published before --since)[/dim]"
            )

        elif step_name == "download_start":
            console.print(f"{prefix}Downloading '{escape(step_data['title'])}'")

        elif step_name == "download_progress":
            progress = step_data["progress"]
            if progress.status == "finished":
                size_mb = progress.downloaded_bytes / (1024 * 1024)
                complete = (
                    f", {progress.percentage:.0f}% of declared size"
                    if progress.percentage is not None
                    else ""
                )
                console.print(f"{prefix}[dim]Received {size_mb:.1f} MB{complete}[/dim]")

        elif step_name == "download_complete":
            console.print(f"{prefix}[green]✓[/green] Saved {escape(str(step_data['path']))}")

        elif step_name == "download_failed":
            console.print(
                f"{prefix}[red]✗[/red] Download failed: {escape(step_data['error'])}"
            )

        elif step_name == "validation_passed":
            console.print(
                f"{prefix}[green]✓[/green] Duration ok "
                f"({step_data['actual']:.0f}s, expected {step_data['expected']:.0f}s)"
            )

        elif step_name == "validation_skipped":
            console.print(
                f"{prefix}[dim]No declared duration, validation skipped[/dim]"
            )

        elif step_name == "validation_failed":
            console.print(
                f"{prefix}[red]✗[/red] Validation failed: {escape(step_data['error'])}"
            )

        elif step_name == "task_complete":
            console.print(
                f"{prefix}[green]✓[/green] Done: {step_data['downloaded']} downloaded, "
                f"{step_data['skipped']} skipped, {step_data['failed']} failed"
            )

    return handle_progress


@app.command()
def main(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Batch configuration file (YAML)"
    ),
    url: str | None = typer.Option(None, "--url", "-u", help="Podcast RSS feed URL"),
    dest: Path = typer.Option(
        Path("."), "--dest", "-d", help="Directory to save downloaded audio files"
    ),
    since: str | None = typer.Option(
        None,
        "--since",
        "-s",
        help="Only download episodes published at or after this RFC 3339 time",
    ),
    file_format: str = typer.Option(
        DEFAULT_FILENAME_TEMPLATE,
        "--format",
        "-f",
        help="Filename template using {channel}, {date} and {episode}",
    ),
    validate: bool = typer.Option(
        False, "--validate", help="Check downloaded duration against the feed (needs ffprobe)"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="HTTP timeout in seconds (default: wait indefinitely)", min=0
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs to file"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """Download podcast episodes from an RSS feed or a batch config.

    Examples:
        podgrab -u https://example.com/feed.xml -d ./podcasts

        podgrab -u https://example.com/feed.xml --since 2024-01-01T00:00:00Z --validate

        podgrab -c podgrab.yaml
    """
    setup_logging(verbose=verbose, log_file=log_file)

    # A config file wins over --url
    if config is not None:
        try:
            batch = ConfigManager(config).load_config()
        except ConfigError as e:
            console.print(f"[red]✗[/red] Failed to load configuration: {escape(str(e))}")
            sys.exit(1)

        runner = TaskRunner(
            validate=validate,
            timeout=timeout,
            progress_callback=_make_progress_handler(batch=True),
        )
        results = asyncio.run(runner.run_all(batch.tasks))

        # Batch mode reports task failures but still exits 0
        for error in collect_errors(results):
            console.print(f"[red]✗[/red] {escape(str(error))}")
        return

    if not url:
        console.print(
            "[red]✗[/red] Error: specify either a config file (-c/--config) "
            "or an RSS URL (-u/--url)"
        )
        console.print("Try [cyan]podgrab --help[/cyan] for usage.")
        sys.exit(1)

    try:
        task = Task(url=url, destination=dest, since=since, format=file_format)
    except pydantic.ValidationError as e:
        messages = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        console.print(f"[red]✗[/red] Invalid options: {escape(messages)}")
        sys.exit(1)

    runner = TaskRunner(
        validate=validate,
        timeout=timeout,
        progress_callback=_make_progress_handler(batch=False),
    )
    result = asyncio.run(runner.run_task(task))

    if result.error is not None:
        console.print(f"[red]✗[/red] Task failed: {escape(str(result.error))}")
        sys.exit(1)


if __name__ == "__main__":
    app()
