"""Minimal asynchronous GitHub REST client used by probes."""

import logging

import aiohttp

logger = logging.getLogger(__name__)


class GitHubClient:
    """Read-only access to GitHub repositories."""

    def __init__(
        self, token: str | None = None, base_url: str = "https://api.github.com"
    ) -> None:
        """Initialize client with an optional token and API base URL."""
        self.token = token
        self.base_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def repository_exists(self, repository: str) -> bool:
        """Check whether a repository is reachable.

        Args:
            repository: Repository identifier in owner/repo format

        Returns:
            True if GitHub knows the repository, False on 404

        Raises:
            RuntimeError: On any other HTTP status

        """
        url = f"{self.base_url}/repos/{repository}"

        async with aiohttp.ClientSession() as session:
            async with session.get(url, headers=self._headers()) as response:
                if response.status == 200:
                    return True
                if response.status == 404:
                    logger.info(f"Repository {repository} not found on GitHub")
                    return False
                text = await response.text()
                raise RuntimeError(
                    f"Failed to get repository {repository}: {response.status} {text}"
                )
