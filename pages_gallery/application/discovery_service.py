"""Application service for discovering GitHub Pages apps."""

import logging
import time
from typing import Callable, Iterable, Iterator, List, Optional

from pages_gallery.application.catalog_builder import CatalogBuilder
from pages_gallery.application.repo_enricher import RepoEnricher
from pages_gallery.domain.repository import Account, AppEntry, Catalog, RepositorySummary
from pages_gallery.infrastructure.github_client import GitHubRestClient, RateLimitExceeded

logger = logging.getLogger(__name__)


class DiscoveryService:
    """Service for listing Pages repositories per account and building the catalog."""

    PAGE_SIZE = 100  # Maximum repos per REST page
    MAX_PAGES = 50  # Upper bound in case the API keeps returning full pages
    RATE_LIMIT_WAIT_SECONDS = 60

    def __init__(
        self,
        client_factory: Optional[Callable[[Account], GitHubRestClient]] = None,
        catalog_builder: Optional[CatalogBuilder] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize discovery service.

        Args:
            client_factory: Builds an API client authenticated for an account
            catalog_builder: Aggregates the per-account entries
            sleep: Used for the rate-limit wait
        """
        self.client_factory = client_factory or (lambda account: GitHubRestClient(token=account.token))
        self.catalog_builder = catalog_builder or CatalogBuilder()
        self.sleep = sleep

    def iter_repository_pages(
        self,
        github_client: GitHubRestClient,
        account: Account,
    ) -> Iterator[List[RepositorySummary]]:
        """
        Yield pages of repositories until a short page or the page ceiling.

        A rate-limited page is retried after a fixed wait, without limit.
        Any other error propagates and ends the iteration.
        """
        page = 1
        while page <= self.MAX_PAGES:
            logger.info(f"Fetching page {page} of repositories for {account.name}...")
            try:
                repos = github_client.list_repositories_page(
                    account.name, account.kind, page, per_page=self.PAGE_SIZE
                )
            except RateLimitExceeded:
                logger.warning(f"Rate limit hit, waiting {self.RATE_LIMIT_WAIT_SECONDS} seconds...")
                self.sleep(self.RATE_LIMIT_WAIT_SECONDS)
                continue

            logger.info(f"Page {page}: Found {len(repos)} repositories")
            yield repos

            if len(repos) < self.PAGE_SIZE:
                return
            page += 1

        logger.warning(f"Reached maximum page limit ({self.MAX_PAGES}), stopping pagination")

    def fetch_all_repositories(self, github_client: GitHubRestClient, account: Account) -> List[RepositorySummary]:
        repositories: List[RepositorySummary] = []
        for repos in self.iter_repository_pages(github_client, account):
            repositories.extend(repos)

        logger.info(f"Total repositories found for {account.name}: {len(repositories)}")
        return repositories

    def discover_account(self, account: Account) -> List[AppEntry]:
        """
        Build catalog entries for every Pages-enabled repository of one account.

        Repositories whose details cannot be fetched are logged and skipped.
        """
        github_client = self.client_factory(account)
        enricher = RepoEnricher(github_client)

        repositories = self.fetch_all_repositories(github_client, account)
        pages_repos = [repo for repo in repositories if repo.has_pages]
        logger.info(f"Repositories with GitHub Pages for {account.name}: {len(pages_repos)}")
        if pages_repos:
            logger.info(f"Pages repositories: {', '.join(r.name for r in pages_repos)}")

        apps: List[AppEntry] = []
        for repo in pages_repos:
            logger.info(f"Processing repository: {account.name}/{repo.name}")
            try:
                app = enricher.enrich(repo, account)
            except Exception as e:
                logger.error(f"Error processing repository {account.name}/{repo.name}: {e}")
                continue

            apps.append(app)
            logger.info(f"Added app: {app.name}")

        return apps

    def discover(self, accounts: Iterable[Account]) -> Catalog:
        """
        Discover apps for each account in order and build the catalog.

        Args:
            accounts: Accounts with credentials, in processing order

        Returns:
            The catalog, sorted newest first
        """
        contributions = []
        for account in accounts:
            logger.info(f"Starting GitHub Pages app discovery for {account.name} ({account.kind.value})")
            apps = self.discover_account(account)
            logger.info(f"Discovered {len(apps)} apps for {account.name}")
            contributions.append(apps)

        catalog = self.catalog_builder.build(contributions)
        if catalog.apps:
            logger.info(f"Apps found: {', '.join(app.name for app in catalog.apps)}")
        return catalog
