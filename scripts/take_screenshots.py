#!/usr/bin/env python3
"""Script to capture a screenshot of every app in the catalog."""

import asyncio
import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from pages_gallery.config import load_settings
from pages_gallery.infrastructure.catalog_store import CatalogReadError, CatalogStore
from pages_gallery.application.screenshot_service import ScreenshotService

logger = logging.getLogger(__name__)


def main():
    """Capture screenshots; individual failures leave a .failed.txt marker."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        service = ScreenshotService(CatalogStore(settings.catalog_path))
        asyncio.run(service.run())
        return 0
    except CatalogReadError as e:
        logger.error(f"Cannot capture screenshots: {e}")
        return 1
    except Exception as e:
        logger.error(f"Screenshot capture failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
