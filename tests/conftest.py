"""Shared fixtures for event router tests."""

import pytest

from event_router.routing import Event, EventKind

ROUTER_ENV_VARS = [
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_API_URL",
    "LOG_LEVEL",
    "ISSUE_TITLE",
    "PR_TITLE",
    "COMMENT_BODY",
    "COMMENT_AUTHOR",
    "ISSUE_LABELS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and any .env file."""
    for name in ROUTER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class RecordingReporter:
    """Reporter that keeps every call for later inspection."""

    def __init__(self, calls=None):
        self.calls = calls if calls is not None else []

    def event_received(self, event):
        self.calls.append(("event_received", event.kind.value, event.action))

    def no_match(self, event):
        self.calls.append(("no_match",))

    def matched(self, count):
        self.calls.append(("matched", count))

    def decision(self, decision):
        self.calls.append(("decision", decision.agent, decision.action))

    def annotated(self, number, decision):
        self.calls.append(("annotated", number, decision.agent))


class FakeAnnotator:
    """Annotator that records calls and optionally fails on chosen agents."""

    def __init__(self, calls=None, fail_for=()):
        self.calls = calls if calls is not None else []
        self.fail_for = set(fail_for)

    async def annotate(self, number, agent, action):
        self.calls.append(("annotate", number, agent, action))
        if agent in self.fail_for:
            raise RuntimeError(f"GitHub is down for {agent}")


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def issue_opened():
    return Event(kind=EventKind.ISSUE, action="opened", number=42, title="Crash on start")


@pytest.fixture
def make_annotator():
    """Factory for FakeAnnotator instances."""
    return FakeAnnotator
