"""Unit tests for the router CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from event_router.config import EventEnvironment
from event_router.exceptions import UsageError
from event_router.main import build_event, cli, parse_number
from event_router.routing import AGENT_EXECUTE_LABEL, EventKind
from event_router.utils.github import GitHubAnnotator


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from reconfiguring root logging during tests."""
    with patch("event_router.main.configure_logging"):
        yield


@pytest.fixture
def github_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "test-token")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo-org/hello-world")


class TestBuildEvent:
    """Turning arguments and environment into an Event."""

    def test_requires_two_arguments(self):
        with pytest.raises(UsageError):
            build_event(["issue"], EventEnvironment())

    def test_unknown_kind(self):
        with pytest.raises(UsageError, match="release"):
            build_event(["release", "published"], EventEnvironment())

    def test_issue_from_environment(self, monkeypatch):
        monkeypatch.setenv("ISSUE_TITLE", "Crash on start")
        monkeypatch.setenv("PR_TITLE", "ignored")
        monkeypatch.setenv("COMMENT_AUTHOR", "octocat")
        monkeypatch.setenv("ISSUE_LABELS", '[{"name": "bug"}, {"name": "p1"}]')

        event = build_event(["issue", "labeled", "42", "fallback-author"], EventEnvironment())

        assert event.kind is EventKind.ISSUE
        assert event.action == "labeled"
        assert event.number == 42
        assert event.title == "Crash on start"
        assert event.author == "octocat"
        assert event.labels == ("bug", "p1")

    def test_pr_title_and_positional_author(self, monkeypatch):
        monkeypatch.setenv("PR_TITLE", "Add feature")

        event = build_event(["pr", "opened", "7", "octocat"], EventEnvironment())

        assert event.kind is EventKind.PULL_REQUEST
        assert event.title == "Add feature"
        assert event.author == "octocat"
        assert event.labels is None

    def test_comment_body(self, monkeypatch):
        monkeypatch.setenv("COMMENT_BODY", "/agent run tests")
        event = build_event(["comment", "created", "3"], EventEnvironment())
        assert event.body == "/agent run tests"
        assert event.number == 3

    def test_missing_number(self):
        event = build_event(["issue", "opened"], EventEnvironment())
        assert event.number is None

    def test_malformed_labels_are_dropped(self, monkeypatch, caplog):
        monkeypatch.setenv("ISSUE_LABELS", "{not json")

        event = build_event(["issue", "opened", "42"], EventEnvironment())

        assert event.labels == ()
        assert event.number == 42
        assert "Failed to parse ISSUE_LABELS" in caplog.text

    def test_push(self):
        event = build_event(["push", "push", "main", "abc123"], EventEnvironment())
        assert event.kind is EventKind.PUSH
        assert event.branch == "main"
        assert event.commit == "abc123"
        assert event.number is None


@pytest.mark.parametrize(
    "value,expected",
    [(None, None), ("42", 42), ("abc", None), ("", None)],
)
def test_parse_number(value, expected):
    assert parse_number(value) == expected


class TestCli:
    """End-to-end runs of the router command."""

    def test_no_arguments(self, runner):
        result = runner.invoke(cli, [])
        assert result.exit_code == 1

    def test_single_argument(self, runner):
        result = runner.invoke(cli, ["issue"])
        assert result.exit_code == 1

    def test_unknown_kind(self, runner):
        result = runner.invoke(cli, ["release", "published"])
        assert result.exit_code == 1

    def test_push_to_main(self, runner):
        result = runner.invoke(cli, ["push", "push", "main", "abc123"])
        assert result.exit_code == 0
        assert "Routing to DeploymentAgent" in result.output
        assert "Priority: medium" in result.output

    def test_push_to_develop_matches_nothing(self, runner):
        result = runner.invoke(cli, ["push", "push", "develop"])
        assert result.exit_code == 0
        assert "No routing rules matched" in result.output

    def test_labeled_issue_with_marker(self, runner, monkeypatch):
        monkeypatch.setenv("ISSUE_LABELS", f'[{{"name": "{AGENT_EXECUTE_LABEL}"}}]')
        result = runner.invoke(cli, ["issue", "labeled", "42"])
        assert result.exit_code == 0
        assert "Routing to CoordinatorAgent" in result.output

    def test_malformed_labels_still_route(self, runner, monkeypatch):
        monkeypatch.setenv("ISSUE_LABELS", "oops")
        result = runner.invoke(cli, ["issue", "opened", "42"])
        assert result.exit_code == 0
        assert "Routing to IssueAgent" in result.output

    def test_annotates_when_configured(self, runner, github_env):
        with patch.object(GitHubAnnotator, "annotate", new_callable=AsyncMock) as mock_annotate:
            result = runner.invoke(cli, ["issue", "opened", "42"])

        assert result.exit_code == 0
        mock_annotate.assert_awaited_once_with(42, "IssueAgent", "Analyze and auto-label issue")
        assert "Created routing comment on #42" in result.output

    def test_dry_run_skips_annotation(self, runner, github_env):
        with patch.object(GitHubAnnotator, "annotate", new_callable=AsyncMock) as mock_annotate:
            result = runner.invoke(cli, ["--dry-run", "issue", "opened", "42"])

        assert result.exit_code == 0
        mock_annotate.assert_not_awaited()
        assert "Routing to IssueAgent" in result.output

    def test_no_annotation_without_token(self, runner, monkeypatch):
        monkeypatch.setenv("GITHUB_REPOSITORY", "octo-org/hello-world")
        with patch.object(GitHubAnnotator, "annotate", new_callable=AsyncMock) as mock_annotate:
            result = runner.invoke(cli, ["issue", "opened", "42"])

        assert result.exit_code == 0
        mock_annotate.assert_not_awaited()

    def test_annotation_failure_is_not_fatal(self, runner, github_env):
        with patch.object(
            GitHubAnnotator, "annotate", new_callable=AsyncMock, side_effect=RuntimeError("boom")
        ):
            result = runner.invoke(cli, ["pr", "opened", "7"])

        assert result.exit_code == 0
        assert "Routing to ReviewAgent" in result.output

    def test_unhandled_error_exits_nonzero(self, runner):
        router = MagicMock()
        router.route = AsyncMock(side_effect=RuntimeError("Routing exploded"))
        with patch("event_router.main.create_default_router", return_value=router):
            result = runner.invoke(cli, ["issue", "opened", "42"])

        assert result.exit_code == 1

    def test_invalid_log_level_env(self, runner, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        result = runner.invoke(cli, ["push", "push", "main"])
        assert result.exit_code == 1

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
