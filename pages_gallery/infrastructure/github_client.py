"""GitHub REST API client for repository, Pages and contents lookups."""

import base64
import logging
from typing import List, Optional, Dict, Any
import requests

from pages_gallery.domain.repository import AccountKind, RepositorySummary

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"GitHub API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""
    pass


class GitHubRestClient:
    """Read-only client for the GitHub REST API, authenticated per account."""

    API_URL = "https://api.github.com"
    REQUEST_TIMEOUT_SECONDS = 30
    PAGE_SIZE = 100
    RATE_LIMIT_STATUS_CODES = (403, 429)

    def __init__(self, token: Optional[str] = None, api_url: Optional[str] = None):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub personal access token for the account being read
            api_url: API root, defaults to the public GitHub API
        """
        self.api_url = (api_url or self.API_URL).rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })

        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Perform a GET request and decode the JSON body.

        Args:
            path: API path starting with '/'
            params: Query parameters

        Returns:
            Decoded JSON body, or None for an empty (204) response

        Raises:
            RateLimitExceeded: If GitHub answers 403 or 429
            GitHubAPIError: For any other non-success status
            requests.RequestException: If the request itself fails
        """
        url = f"{self.api_url}{path}"
        response = self.session.get(url, params=params, timeout=self.REQUEST_TIMEOUT_SECONDS)

        if response.status_code == 204:
            return None

        if response.status_code in self.RATE_LIMIT_STATUS_CODES:
            remaining = response.headers.get("X-RateLimit-Remaining")
            logger.warning(f"Rate limited on {path} (remaining: {remaining})")
            raise RateLimitExceeded(response.status_code, response.text)

        if not response.ok:
            raise GitHubAPIError(response.status_code, response.text)

        return response.json()

    def list_repositories_page(
        self,
        account: str,
        kind: AccountKind,
        page: int,
        per_page: int = PAGE_SIZE,
    ) -> List[RepositorySummary]:
        """
        Fetch one page of repositories for an account, most recently updated first.

        Args:
            account: User or organization login
            kind: Whether the account is an individual or an organization
            page: 1-based page number
            per_page: Page size (max 100)

        Returns:
            Repository summaries on that page
        """
        if kind == AccountKind.ORGANIZATION:
            path = f"/orgs/{account}/repos"
        else:
            path = f"/users/{account}/repos"

        params = {
            "per_page": min(per_page, self.PAGE_SIZE),
            "page": page,
            "sort": "updated",
            "type": "all",
        }
        data = self._get(path, params) or []
        return [RepositorySummary.from_api(item) for item in data]

    def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch full repository details."""
        return self._get(f"/repos/{owner}/{repo}")

    def get_pages(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch the Pages configuration of a repository."""
        return self._get(f"/repos/{owner}/{repo}/pages")

    def get_file_content(self, owner: str, repo: str, path: str) -> str:
        """
        Fetch a file from the repository's default branch and decode it.

        Raises:
            GitHubAPIError: If the path does not exist or is not a file
            ValueError: If the content cannot be decoded
        """
        data = self._get(f"/repos/{owner}/{repo}/contents/{path}")
        if not isinstance(data, dict) or "content" not in data:
            raise GitHubAPIError(404, f"{path} is not a file")

        if data.get("encoding", "base64") != "base64":
            raise ValueError(f"Unsupported content encoding: {data.get('encoding')}")

        return base64.b64decode(data["content"]).decode("utf-8")

    def list_contributors(self, owner: str, repo: str, per_page: int = PAGE_SIZE) -> List[Dict[str, Any]]:
        """Fetch the first page of contributors; empty repositories yield an empty list."""
        params = {"per_page": min(per_page, self.PAGE_SIZE)}
        return self._get(f"/repos/{owner}/{repo}/contributors", params) or []
