#!/usr/bin/env python3
"""Script to discover GitHub Pages apps and write the apps catalog."""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pages_gallery.config import load_settings
from pages_gallery.infrastructure.github_client import GitHubRestClient
from pages_gallery.infrastructure.catalog_store import CatalogStore
from pages_gallery.application.discovery_service import DiscoveryService

logger = logging.getLogger(__name__)


def main():
    """Discover Pages apps for every configured account and write the catalog."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        accounts = settings.accounts()
        if not accounts:
            logger.warning("No account has a token configured. The catalog will be empty.")

        discovery = DiscoveryService(
            client_factory=lambda account: GitHubRestClient(token=account.token, api_url=settings.api_url)
        )
        catalog = discovery.discover(accounts)

        CatalogStore(settings.catalog_path).write(catalog)
        logger.info(f"Successfully discovered {catalog.total_apps} GitHub Pages apps")
        return 0

    except Exception as e:
        logger.error(f"Error discovering GitHub Pages apps: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
