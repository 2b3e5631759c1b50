"""Event router: matches an event against the rule table and reports decisions."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Tuple

from .events import Event
from .reporting import LogReporter, Reporter
from .rules import DEFAULT_RULES, Priority, RoutingRule

logger = logging.getLogger(__name__)


class Annotator(Protocol):
    """Records a routing decision on the issue or pull request it concerns."""

    async def annotate(self, number: int, agent: str, action: str) -> None: ...


@dataclass(frozen=True)
class RoutingDecision:
    """One matched rule, as handed to the agent."""

    agent: str
    priority: Priority
    action: str

    @classmethod
    def from_rule(cls, rule: RoutingRule) -> "RoutingDecision":
        return cls(agent=rule.agent, priority=rule.priority, action=rule.action)


@dataclass
class RoutingResult:
    """Outcome of routing one event."""

    event: Event
    decisions: List[RoutingDecision] = field(default_factory=list)
    """Decisions in priority order, most urgent first."""

    annotated: List[RoutingDecision] = field(default_factory=list)
    """Decisions recorded as a comment."""

    failed: List[RoutingDecision] = field(default_factory=list)
    """Decisions whose comment could not be recorded."""

    @property
    def matched(self) -> bool:
        return bool(self.decisions)

    def __len__(self) -> int:
        return len(self.decisions)


class EventRouter:
    """Routes events to the agents whose rules match them."""

    def __init__(
        self,
        rules: Iterable[RoutingRule] = (),
        *,
        annotator: Optional[Annotator] = None,
        reporter: Optional[Reporter] = None,
    ):
        self._rules: List[RoutingRule] = list(rules)
        self._annotator = annotator
        self._reporter = reporter or LogReporter()

    def register_rule(self, rule: RoutingRule) -> None:
        """Register a routing rule.

        Rules registered earlier win ties between equal priorities.

        Args:
            rule: The routing rule to register.
        """
        self._rules.append(rule)

    @property
    def rules(self) -> Tuple[RoutingRule, ...]:
        return tuple(self._rules)

    def get_routes(self, event: Event) -> List[RoutingRule]:
        """Get all rules matching an event, most urgent first.

        Args:
            event: The event to match.

        Returns:
            Matching rules sorted by priority. Rules of equal priority keep
            their registration order.
        """
        matched = [rule for rule in self._rules if rule.matches(event)]
        return sorted(matched, key=lambda rule: rule.priority.rank)

    async def route(self, event: Event) -> RoutingResult:
        """Route an event and record each decision on its issue or PR.

        A failed annotation is logged and skipped; it never stops the
        remaining decisions from being reported and annotated.

        Args:
            event: The event to route.

        Returns:
            RoutingResult with the decisions in priority order. An empty
            result means no rule matched.
        """
        self._reporter.event_received(event)

        result = RoutingResult(
            event=event,
            decisions=[RoutingDecision.from_rule(rule) for rule in self.get_routes(event)],
        )

        if not result.matched:
            self._reporter.no_match(event)
            return result

        self._reporter.matched(len(result))

        for decision in result.decisions:
            self._reporter.decision(decision)

            if event.number is None or self._annotator is None:
                continue

            try:
                await self._annotator.annotate(event.number, decision.agent, decision.action)
            except Exception as e:
                logger.warning(
                    f"Failed to create routing comment for {decision.agent} on #{event.number}: {e}"
                )
                result.failed.append(decision)
            else:
                result.annotated.append(decision)
                self._reporter.annotated(event.number, decision)

        return result


def create_default_router(
    annotator: Optional[Annotator] = None,
    reporter: Optional[Reporter] = None,
) -> EventRouter:
    """Create router with the default routing rules.

    Returns:
        EventRouter configured with the standard rule table.
    """
    return EventRouter(DEFAULT_RULES, annotator=annotator, reporter=reporter)
