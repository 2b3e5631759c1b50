"""CLI for routing a single GitHub event to the agents that handle it."""

import asyncio
import logging
import sys
from typing import Optional, Sequence

import click

from event_router import __version__
from event_router.config import EventEnvironment, create_settings
from event_router.exceptions import LabelParseError, UsageError
from event_router.logging_config import configure_logging
from event_router.routing import (
    ConsoleReporter,
    Event,
    EventKind,
    create_default_router,
    parse_labels,
)
from event_router.utils.github import GitHubAnnotator

logger = logging.getLogger(__name__)

USAGE = "Usage: router <event-kind> <action> [args...]"


def parse_number(value: Optional[str]) -> Optional[int]:
    """Parse an issue or pull request number, None if missing or not numeric."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric issue number: {value!r}")
        return None


def build_event(args: Sequence[str], env: EventEnvironment) -> Event:
    """Build an event from positional arguments and the event environment.

    Args:
        args: ``<event-kind> <action> [args...]``. Issues, pull requests and
            comments take ``[number] [author]``; pushes take
            ``[branch] [commit]``.
        env: Title, body, author and labels passed through the environment.

    Returns:
        The event to route.

    Raises:
        UsageError: If fewer than two arguments are given or the event kind
            is unknown.
    """
    if len(args) < 2:
        raise UsageError("Expected at least an event kind and an action")

    kind_name, action, *rest = args
    try:
        kind = EventKind(kind_name)
    except ValueError:
        valid = ", ".join(k.value for k in EventKind)
        raise UsageError(f"Unknown event kind '{kind_name}' (expected one of: {valid})")

    if kind == EventKind.PUSH:
        return Event(
            kind=kind,
            action=action,
            branch=rest[0] if rest else None,
            commit=rest[1] if len(rest) > 1 else None,
        )

    labels = None
    if env.issue_labels:
        try:
            labels = parse_labels(env.issue_labels)
        except LabelParseError as e:
            logger.warning(f"⚠️  Failed to parse ISSUE_LABELS: {e}")
            labels = ()

    return Event(
        kind=kind,
        action=action,
        number=parse_number(rest[0] if rest else None),
        title=env.issue_title or env.pr_title,
        body=env.comment_body,
        author=env.comment_author or (rest[1] if len(rest) > 1 else None),
        labels=labels,
    )


@click.command(context_settings={"ignore_unknown_options": True})
@click.version_option(version=__version__)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Report routing decisions without commenting on GitHub.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL.",
)
@click.argument("args", nargs=-1)
def cli(args: Sequence[str], dry_run: bool, log_level: Optional[str]):
    """Route a GitHub event to the agents that should handle it.

    EVENT-KIND is one of issue, pr, push or comment.
    """
    settings = create_settings()
    configure_logging((log_level or settings.log_level).upper())

    try:
        event = build_event(args, EventEnvironment())
    except UsageError as e:
        logger.error(f"❌ {e}")
        click.echo(USAGE, err=True)
        sys.exit(1)

    annotator = None if dry_run else GitHubAnnotator.from_settings(settings)
    router = create_default_router(annotator=annotator, reporter=ConsoleReporter())

    try:
        asyncio.run(router.route(event))
    except Exception as e:
        logger.error(f"❌ Fatal error: {e}", exc_info=True)
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
