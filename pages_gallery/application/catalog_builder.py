"""Aggregates per-account app entries into the catalog."""

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from pages_gallery.domain.repository import AppEntry, Catalog, format_timestamp

logger = logging.getLogger(__name__)


class CatalogBuilder:
    """Concatenates account contributions and orders them newest first."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            clock: Returns the build time, defaults to the current UTC time
        """
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def build(self, contributions: Iterable[List[AppEntry]]) -> Catalog:
        apps: List[AppEntry] = []
        for entries in contributions:
            apps.extend(entries)

        # sorted() is stable, so equal timestamps keep account-processing order
        apps = sorted(apps, key=lambda app: app.updated_at_datetime, reverse=True)

        catalog = Catalog(last_updated=format_timestamp(self.clock()), apps=apps)
        logger.info(f"Built catalog with {catalog.total_apps} apps")
        return catalog
