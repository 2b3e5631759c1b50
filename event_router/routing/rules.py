"""Routing rules for GitHub events.

This module defines which agent handles which event. Each rule pairs a
predicate over an ``Event`` with the agent to notify, the priority of the
work, and a short description of what the agent should do.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple

from .events import Event, EventKind

AGENT_EXECUTE_LABEL = "🤖agent-execute"
"""Label that hands an issue to the coordinator for autonomous execution."""

AGENT_COMMAND_PREFIX = "/agent"
"""Comment prefix that addresses the coordinator directly."""


class Priority(str, Enum):
    """Priority levels, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: 0 for critical through 3 for low."""
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


@dataclass(frozen=True)
class RoutingRule:
    """Defines which agent an event is routed to."""

    condition: Callable[[Event], bool]
    """Predicate deciding whether the rule applies to an event."""

    agent: str
    """Name of the agent that should act."""

    priority: Priority
    """How urgently the agent should act."""

    action: str
    """Human-readable description of what the agent should do."""

    def matches(self, event: Event) -> bool:
        return bool(self.condition(event))


def is_agent_command(event: Event) -> bool:
    return (
        event.kind == EventKind.COMMENT
        and event.body is not None
        and event.body.startswith(AGENT_COMMAND_PREFIX)
    )


def is_agent_execute_label(event: Event) -> bool:
    return (
        event.kind == EventKind.ISSUE
        and event.action == "labeled"
        and event.has_label(AGENT_EXECUTE_LABEL)
    )


def on_action(kind: EventKind, action: str) -> Callable[[Event], bool]:
    """Build a predicate matching one kind/action pair."""

    def condition(event: Event) -> bool:
        return event.kind == kind and event.action == action

    return condition


def on_push_to(branch: str) -> Callable[[Event], bool]:
    """Build a predicate matching pushes to a branch."""

    def condition(event: Event) -> bool:
        return event.kind == EventKind.PUSH and event.branch == branch

    return condition


DEFAULT_RULES: Tuple[RoutingRule, ...] = (
    RoutingRule(
        condition=is_agent_execute_label,
        agent="CoordinatorAgent",
        priority=Priority.CRITICAL,
        action="Execute autonomous task",
    ),
    RoutingRule(
        condition=is_agent_command,
        agent="CoordinatorAgent",
        priority=Priority.CRITICAL,
        action="Parse and execute command",
    ),
    RoutingRule(
        condition=on_action(EventKind.ISSUE, "opened"),
        agent="IssueAgent",
        priority=Priority.HIGH,
        action="Analyze and auto-label issue",
    ),
    RoutingRule(
        condition=on_action(EventKind.ISSUE, "assigned"),
        agent="IssueAgent",
        priority=Priority.HIGH,
        action="Transition to implementing state",
    ),
    RoutingRule(
        condition=on_action(EventKind.ISSUE, "closed"),
        agent="IssueAgent",
        priority=Priority.MEDIUM,
        action="Transition to done state",
    ),
    RoutingRule(
        condition=on_action(EventKind.PULL_REQUEST, "opened"),
        agent="ReviewAgent",
        priority=Priority.HIGH,
        action="Run quality checks",
    ),
    RoutingRule(
        condition=on_action(EventKind.PULL_REQUEST, "ready_for_review"),
        agent="ReviewAgent",
        priority=Priority.HIGH,
        action="Run quality checks and request review",
    ),
    RoutingRule(
        condition=on_push_to("main"),
        agent="DeploymentAgent",
        priority=Priority.MEDIUM,
        action="Deploy to production",
    ),
)
