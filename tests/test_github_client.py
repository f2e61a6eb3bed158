"""Tests for the GitHub REST client."""

import base64
from unittest.mock import MagicMock, patch

import pytest

from pages_gallery.domain.repository import AccountKind
from pages_gallery.infrastructure.github_client import (
    GitHubAPIError,
    GitHubRestClient,
    RateLimitExceeded,
)

from helpers import make_response


@pytest.fixture
def session() -> MagicMock:
    with patch("pages_gallery.infrastructure.github_client.requests.Session") as session_class:
        session = MagicMock()
        session.headers = {}
        session_class.return_value = session
        yield session


class TestGitHubRestClient:
    """Tests for GitHubRestClient."""

    def test_init_sets_bearer_token(self, session: MagicMock) -> None:
        """Test the token is sent as a bearer credential."""
        GitHubRestClient(token="abc")

        assert session.headers["Authorization"] == "Bearer abc"
        assert session.headers["Accept"] == "application/vnd.github+json"

    def test_init_without_token(self, session: MagicMock) -> None:
        """Test no Authorization header is sent without a token."""
        GitHubRestClient()

        assert "Authorization" not in session.headers

    def test_list_repositories_page_for_user(self, session: MagicMock) -> None:
        """Test listing uses the users endpoint sorted by update time."""
        session.get.return_value = make_response(json_data=[
            {"name": "site", "has_pages": True, "updated_at": "2024-01-01T00:00:00Z",
             "html_url": "https://github.com/octo/site"},
            {"name": "lib", "has_pages": False, "updated_at": "2023-01-01T00:00:00Z",
             "html_url": "https://github.com/octo/lib"},
        ])
        client = GitHubRestClient(token="abc")

        repos = client.list_repositories_page("octo", AccountKind.INDIVIDUAL, page=3)

        args, kwargs = session.get.call_args
        assert args[0] == "https://api.github.com/users/octo/repos"
        assert kwargs["params"] == {"per_page": 100, "page": 3, "sort": "updated", "type": "all"}
        assert [r.name for r in repos] == ["site", "lib"]
        assert repos[0].has_pages is True
        assert repos[1].has_pages is False

    def test_list_repositories_page_for_organization(self, session: MagicMock) -> None:
        """Test organizations are listed through the orgs endpoint."""
        session.get.return_value = make_response(json_data=[])
        client = GitHubRestClient(token="abc", api_url="https://ghe.example.com/api/v3/")

        repos = client.list_repositories_page("acme", AccountKind.ORGANIZATION, page=1)

        assert repos == []
        assert session.get.call_args[0][0] == "https://ghe.example.com/api/v3/orgs/acme/repos"

    def test_forbidden_raises_rate_limit(self, session: MagicMock) -> None:
        """Test a 403 is reported as a rate limit."""
        session.get.return_value = make_response(403, text="API rate limit exceeded")
        client = GitHubRestClient(token="abc")

        with pytest.raises(RateLimitExceeded) as exc_info:
            client.get_repository("octo", "site")

        assert exc_info.value.status_code == 403

    def test_not_found_raises_api_error(self, session: MagicMock) -> None:
        """Test other failures are not treated as rate limits."""
        session.get.return_value = make_response(404, text="Not Found")
        client = GitHubRestClient(token="abc")

        with pytest.raises(GitHubAPIError) as exc_info:
            client.get_pages("octo", "site")

        assert not isinstance(exc_info.value, RateLimitExceeded)
        assert exc_info.value.status_code == 404

    def test_list_contributors_empty_repository(self, session: MagicMock) -> None:
        """Test a 204 from an empty repository yields no contributors."""
        session.get.return_value = make_response(204)
        client = GitHubRestClient(token="abc")

        assert client.list_contributors("octo", "empty") == []
        assert session.get.call_args[1]["params"] == {"per_page": 100}

    def test_get_file_content_decodes_base64(self, session: MagicMock) -> None:
        """Test file content is base64-decoded into text."""
        encoded = base64.b64encode(b'{"name": "demo"}').decode("ascii")
        # GitHub wraps the encoded content across lines
        session.get.return_value = make_response(json_data={
            "content": encoded[:8] + "\n" + encoded[8:],
            "encoding": "base64",
        })
        client = GitHubRestClient(token="abc")

        text = client.get_file_content("octo", "site", "package.json")

        assert text == '{"name": "demo"}'
        assert session.get.call_args[0][0] == "https://api.github.com/repos/octo/site/contents/package.json"

    def test_get_file_content_rejects_directory(self, session: MagicMock) -> None:
        """Test a directory listing is not mistaken for a file."""
        session.get.return_value = make_response(json_data=[{"name": "a.txt"}])
        client = GitHubRestClient(token="abc")

        with pytest.raises(GitHubAPIError):
            client.get_file_content("octo", "site", "package.json")
