"""Event routing for GitHub events."""

from .events import Event, EventKind, parse_labels
from .reporting import ConsoleReporter, LogReporter, Reporter
from .router import (
    Annotator,
    EventRouter,
    RoutingDecision,
    RoutingResult,
    create_default_router,
)
from .rules import AGENT_EXECUTE_LABEL, DEFAULT_RULES, Priority, RoutingRule

__all__ = [
    "AGENT_EXECUTE_LABEL",
    "Annotator",
    "ConsoleReporter",
    "DEFAULT_RULES",
    "Event",
    "EventKind",
    "EventRouter",
    "LogReporter",
    "Priority",
    "Reporter",
    "RoutingDecision",
    "RoutingResult",
    "RoutingRule",
    "create_default_router",
    "parse_labels",
]
