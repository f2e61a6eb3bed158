"""Turns Pages-enabled repository summaries into catalog entries."""

import logging
from typing import List, Optional

import requests

from pages_gallery.domain.repository import (
    Account,
    AppEntry,
    ManifestParseError,
    PackageManifest,
    RepositoryDetail,
    RepositorySummary,
)
from pages_gallery.infrastructure.github_client import GitHubAPIError, GitHubRestClient

logger = logging.getLogger(__name__)


class RepoEnricher:
    """Builds an AppEntry from a repository summary and extra API lookups."""

    DEFAULT_DESCRIPTION = "No description available"
    DEFAULT_LANGUAGE = "Unknown"
    MANIFEST_PATH = "package.json"
    ELECTRON_PACKAGE = "electron"
    SCREENSHOTS_DIR = "screenshots"

    def __init__(self, github_client: GitHubRestClient):
        self.github_client = github_client

    def enrich(self, summary: RepositorySummary, account: Account) -> AppEntry:
        """
        Build the catalog entry for one repository.

        Only the repository detail fetch is required; the Pages URL,
        contributor count and Electron check fall back to defaults.

        Raises:
            GitHubAPIError: If the repository detail cannot be fetched
            requests.RequestException: If the detail request itself fails
        """
        detail = RepositoryDetail.from_api(
            self.github_client.get_repository(account.name, summary.name)
        )

        return AppEntry(
            name=self.app_name(summary.name, account),
            description=detail.description or self.DEFAULT_DESCRIPTION,
            url=self.resolve_pages_url(summary.name, account),
            repository=detail.html_url,
            screenshot=self.screenshot_path(summary.name, account),
            tags=self.build_tags(detail.topics, detail.language),
            language=detail.language or self.DEFAULT_LANGUAGE,
            stars=detail.stars,
            forks=detail.forks,
            updated_at=detail.updated_at,
            contributors=self.count_contributors(summary.name, account),
            is_electron_app=self.is_electron_app(summary.name, account),
            organization=account.name,
        )

    @staticmethod
    def is_root_site(repo_name: str, account: Account) -> bool:
        return repo_name.lower() == account.root_site_name.lower()

    def app_name(self, repo_name: str, account: Account) -> str:
        if self.is_root_site(repo_name, account):
            return account.root_site_name
        return repo_name

    def resolve_pages_url(self, repo_name: str, account: Account) -> str:
        """Pages URL from the Pages API, or built from the naming convention."""
        try:
            pages = self.github_client.get_pages(account.name, repo_name)
        except (GitHubAPIError, requests.RequestException, ValueError) as e:
            logger.info(f"Could not get pages info for {repo_name} ({e}), constructing URL manually")
            return self.fallback_pages_url(repo_name, account)

        html_url = pages.get("html_url") if isinstance(pages, dict) else None
        if isinstance(html_url, str) and html_url:
            return html_url

        logger.info(f"Unexpected pages info for {repo_name}, constructing URL manually")
        return self.fallback_pages_url(repo_name, account)

    def fallback_pages_url(self, repo_name: str, account: Account) -> str:
        if self.is_root_site(repo_name, account):
            return account.pages_domain
        return f"{account.pages_domain}/{repo_name}"

    @staticmethod
    def build_tags(topics: List[str], language: Optional[str]) -> List[str]:
        """Capitalized topics in order, followed by the primary language."""
        tags = [topic[:1].upper() + topic[1:] for topic in topics]
        if language:
            tags.append(language)
        return tags

    def count_contributors(self, repo_name: str, account: Account) -> int:
        # Single capped page: repositories with more than 100 contributors report 100
        try:
            contributors = self.github_client.list_contributors(account.name, repo_name)
        except (GitHubAPIError, requests.RequestException, ValueError) as e:
            logger.info(f"Could not get contributors for {repo_name}: {e}")
            return 0
        return len(contributors) if isinstance(contributors, list) else 0

    def is_electron_app(self, repo_name: str, account: Account) -> bool:
        """Whether the repository's package.json depends on Electron."""
        try:
            text = self.github_client.get_file_content(account.name, repo_name, self.MANIFEST_PATH)
            manifest = PackageManifest.from_json(text)
        except ManifestParseError as e:
            logger.debug(f"Unreadable {self.MANIFEST_PATH} in {repo_name}: {e}")
            return False
        except (GitHubAPIError, requests.RequestException, ValueError) as e:
            logger.debug(f"No {self.MANIFEST_PATH} for {repo_name}: {e}")
            return False

        return manifest.has_dependency(self.ELECTRON_PACKAGE)

    def screenshot_path(self, repo_name: str, account: Account) -> str:
        return f"{self.SCREENSHOTS_DIR}/{account.name}-{repo_name}.png"
