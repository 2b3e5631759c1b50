"""Inbound event model.

An event is a flattened description of a GitHub webhook delivery: what kind of
object it concerns, the lifecycle action, and whichever optional details the
workflow handed over. Fields that do not apply to the event kind stay ``None``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from event_router.exceptions import LabelParseError


class EventKind(str, Enum):
    """Kinds of events the router understands."""

    ISSUE = "issue"
    PULL_REQUEST = "pr"
    PUSH = "push"
    COMMENT = "comment"


@dataclass(frozen=True)
class Event:
    """A single event to route."""

    kind: EventKind
    action: str
    number: Optional[int] = None
    title: Optional[str] = None
    body: Optional[str] = None
    labels: Optional[Tuple[str, ...]] = None
    author: Optional[str] = None
    branch: Optional[str] = None
    commit: Optional[str] = None

    def has_label(self, name: str) -> bool:
        """Return True if the event carries the given label."""
        return self.labels is not None and name in self.labels

    def summary(self) -> str:
        """One-line description used when reporting the event."""
        parts = [f"{self.kind.value} event: {self.action}"]
        if self.number is not None:
            parts.append(f"#{self.number}")
        if self.branch:
            parts.append(f"on {self.branch}")
        if self.author:
            parts.append(f"by {self.author}")
        return " ".join(parts)


class Label(BaseModel):
    """GitHub label object; only the name is kept."""

    model_config = ConfigDict(extra="ignore")

    name: str


_labels_adapter = TypeAdapter(List[Label])


def parse_labels(raw: str) -> Tuple[str, ...]:
    """Decode a JSON array of label objects into label names.

    Args:
        raw: JSON text such as ``[{"name": "bug", "color": "d73a4a"}]``.

    Returns:
        Label names in payload order.

    Raises:
        LabelParseError: If the text is not valid JSON or not a list of
            objects carrying a ``name``.
    """
    try:
        labels = _labels_adapter.validate_json(raw)
    except ValidationError as exc:
        raise LabelParseError(f"Invalid labels payload: {exc}") from exc
    return tuple(label.name for label in labels)
