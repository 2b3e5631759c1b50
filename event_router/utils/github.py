"""GitHub API utilities for the event router."""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from event_router.exceptions import AnnotationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


def parse_repository(repository: str) -> tuple[str, str]:
    """Split an ``owner/repo`` string into its parts.

    Args:
        repository: Repository slug as found in GITHUB_REPOSITORY.

    Returns:
        Tuple of (owner, repo).

    Raises:
        ValueError: If the slug is not of the form ``owner/repo``.
    """
    owner, sep, repo = repository.strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ValueError(f"Invalid repository format: {repository!r} (expected 'owner/repo')")
    return owner, repo


def format_routing_comment(
    agent: str, action: str, timestamp: Optional[datetime] = None
) -> str:
    """Render the Markdown note recording a routing decision.

    Args:
        agent: Agent the event was routed to.
        action: What the agent is expected to do.
        timestamp: When the decision was made (defaults to now, UTC).

    Returns:
        Comment body.
    """
    timestamp = timestamp or datetime.now(timezone.utc)
    return (
        "## 🤖 Event Router\n"
        "\n"
        f"**Agent**: {agent}\n"
        f"**Action**: {action}\n"
        f"**Timestamp**: {timestamp.isoformat()}\n"
        "\n"
        "---\n"
        "*Automated by Webhook Event Router*"
    )


class GitHubAnnotator:
    """Posts routing decisions as comments on issues and pull requests."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_url: str = DEFAULT_API_URL,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self._token = token
        self._client = client

    @classmethod
    def from_settings(cls, settings) -> Optional["GitHubAnnotator"]:
        """Build an annotator from settings.

        Returns:
            The annotator, or None when the token or repository is missing.
        """
        if not settings.github_token:
            logger.info("GITHUB_TOKEN is unset; routing comments are disabled")
            return None
        if not settings.owner or not settings.repo:
            logger.info("GITHUB_REPOSITORY is unset or invalid; routing comments are disabled")
            return None
        return cls(
            token=settings.github_token,
            owner=settings.owner,
            repo=settings.repo,
            api_url=settings.github_api_url,
        )

    def comments_url(self, number: int) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/issues/{number}/comments"

    async def annotate(self, number: int, agent: str, action: str) -> None:
        """Post a routing comment on issue or pull request ``number``.

        Raises:
            AnnotationError: If the GitHub API request fails.
        """
        url = self.comments_url(number)
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
        }
        payload = {"body": format_routing_comment(agent, action)}

        logger.debug(f"Posting routing comment to {url}")

        try:
            if self._client is not None:
                resp = await self._client.post(url, headers=headers, json=payload)
                resp.raise_for_status()
            else:
                async with httpx.AsyncClient() as client:
                    resp = await client.post(url, headers=headers, json=payload)
                    resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise AnnotationError(f"Failed to comment on #{number}: {exc}") from exc
