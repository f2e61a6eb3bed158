#!/usr/bin/env python3
"""
Script to render the static gallery page from the apps catalog.

The catalog is read once, when this script runs, and the cards (or the
error state) are written into index.html. The page does not fetch
apps-data.json in the browser, so it only reflects a new catalog, or
recovers from a missing one, after this script is run again. Run it
after every discovery.
"""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pages_gallery.config import load_settings
from pages_gallery.infrastructure.catalog_store import CatalogStore
from pages_gallery.application.gallery_renderer import GalleryRenderer

logger = logging.getLogger(__name__)


def main():
    """Render the gallery. A missing catalog renders the error page."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        rendered = GalleryRenderer().write(CatalogStore(settings.catalog_path), settings.gallery_output)
        if not rendered:
            logger.warning(f"Rendered error page to {settings.gallery_output}")
        return 0
    except OSError as e:
        logger.error(f"Could not write gallery: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
