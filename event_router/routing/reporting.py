"""Reporting of routing progress.

The router hands every step of a routing pass to a reporter: the inbound
event, whether anything matched, each decision, and each recorded comment.
"""

import logging
from typing import Protocol

import click

from .events import Event

logger = logging.getLogger(__name__)


class Reporter(Protocol):
    """Receives routing progress from an ``EventRouter``."""

    def event_received(self, event: Event) -> None: ...

    def no_match(self, event: Event) -> None: ...

    def matched(self, count: int) -> None: ...

    def decision(self, decision) -> None: ...

    def annotated(self, number: int, decision) -> None: ...


class LogReporter:
    """Reports routing progress through the standard logger."""

    def event_received(self, event: Event) -> None:
        logger.info(f"Received {event.summary()}")

    def no_match(self, event: Event) -> None:
        logger.info(f"No routing rules matched for {event.kind.value} event: {event.action}")

    def matched(self, count: int) -> None:
        logger.info(f"Matched {count} routing rule(s)")

    def decision(self, decision) -> None:
        logger.info(
            f"Routing to {decision.agent} "
            f"(priority={decision.priority.value}, action={decision.action})"
        )

    def annotated(self, number: int, decision) -> None:
        logger.info(f"Created routing comment for {decision.agent} on #{number}")


class ConsoleReporter:
    """Prints routing progress for people reading the CLI output."""

    def event_received(self, event: Event) -> None:
        click.echo(f"\n📥 Received {event.summary()}")

    def no_match(self, event: Event) -> None:
        click.echo("⚠️  No routing rules matched for this event")

    def matched(self, count: int) -> None:
        click.echo(f"\n✅ Matched {count} routing rule(s):")

    def decision(self, decision) -> None:
        click.echo(f"\n🎯 Routing to {decision.agent}")
        click.echo(f"   Priority: {decision.priority.value}")
        click.echo(f"   Action: {decision.action}")

    def annotated(self, number: int, decision) -> None:
        click.echo(f"📝 Created routing comment on #{number}")
