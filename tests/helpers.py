"""Builders shared by the test modules."""

from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

from pages_gallery.domain.repository import Account, AccountKind, AppEntry, RepositorySummary


def make_account(name: str = "octo", kind: AccountKind = AccountKind.INDIVIDUAL) -> Account:
    return Account(name=name, kind=kind, token="token-" + name)


def make_summary(name: str, has_pages: bool = True, updated_at: str = "2024-01-01T00:00:00Z") -> RepositorySummary:
    return RepositorySummary(
        name=name,
        has_pages=has_pages,
        updated_at=updated_at,
        html_url=f"https://github.com/octo/{name}",
    )


def make_page(count: int, prefix: str = "repo", has_pages: bool = False) -> List[RepositorySummary]:
    return [make_summary(f"{prefix}-{i}", has_pages=has_pages) for i in range(count)]


def make_detail(
    name: str,
    owner: str = "octo",
    description: Optional[str] = "A demo app",
    language: Optional[str] = "TypeScript",
    topics: Optional[List[str]] = None,
    updated_at: str = "2024-01-01T00:00:00Z",
) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "language": language,
        "topics": topics if topics is not None else [],
        "stargazers_count": 7,
        "forks_count": 2,
        "updated_at": updated_at,
        "html_url": f"https://github.com/{owner}/{name}",
    }


def make_app(name: str, updated_at: str, organization: str = "octo") -> AppEntry:
    return AppEntry(
        name=name,
        description="desc",
        url=f"https://{organization}.github.io/{name}",
        repository=f"https://github.com/{organization}/{name}",
        screenshot=f"screenshots/{organization}-{name}.png",
        tags=[],
        language="Unknown",
        stars=0,
        forks=0,
        updated_at=updated_at,
        contributors=0,
        is_electron_app=False,
        organization=organization,
    )


def make_response(status_code: int = 200, json_data: Any = None, text: str = "", headers=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = json_data
    response.text = text
    response.headers = headers or {}
    return response
