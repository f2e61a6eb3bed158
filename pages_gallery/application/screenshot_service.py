"""Captures a screenshot of every app listed in the catalog."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from playwright.async_api import Page, async_playwright

from pages_gallery.domain.repository import format_timestamp
from pages_gallery.infrastructure.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class ScreenshotService:
    """Visits each app URL in a headless browser and saves a PNG."""

    VIEWPORT = {"width": 1200, "height": 800}
    NAVIGATION_TIMEOUT_MS = 30000
    SETTLE_DELAY_MS = 3000
    FAILED_SUFFIX = ".failed.txt"

    def __init__(self, catalog_store: CatalogStore, base_dir: Optional[Path] = None):
        """
        Args:
            catalog_store: Source of the app list
            base_dir: Directory screenshot paths are relative to, defaults to
                the catalog's directory
        """
        self.catalog_store = catalog_store
        self.base_dir = Path(base_dir) if base_dir else catalog_store.base_dir

    async def run(self) -> Dict[str, int]:
        """
        Capture screenshots for the whole catalog.

        Raises:
            CatalogReadError: If the catalog cannot be read
        """
        apps = self.catalog_store.read()["apps"]
        logger.info(f"Found {len(apps)} apps to screenshot")

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page()
                await page.set_viewport_size(self.VIEWPORT)
                results = await self.capture_apps(page, apps)
            finally:
                await browser.close()

        logger.info(
            f"Screenshot capture completed: {results['captured']} captured, {results['failed']} failed"
        )
        return results

    async def capture_apps(self, page: Page, apps: List[Dict[str, Any]]) -> Dict[str, int]:
        """Capture each app in turn; a failing app does not stop the others."""
        results = {"captured": 0, "failed": 0}
        for app in apps:
            if await self.capture_app(page, app):
                results["captured"] += 1
            else:
                results["failed"] += 1
        return results

    async def capture_app(self, page: Page, app: Dict[str, Any]) -> bool:
        name = app.get("name", "<unnamed>")
        url = app.get("url")
        screenshot_path: Optional[Path] = None

        try:
            screenshot_path = self.base_dir / app["screenshot"]
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            if not url:
                raise ValueError(f"No URL for {name}")

            logger.info(f"Taking screenshot for {name} at {url}")
            await page.goto(url, wait_until="networkidle", timeout=self.NAVIGATION_TIMEOUT_MS)
            # Let client-side rendering finish
            await page.wait_for_timeout(self.SETTLE_DELAY_MS)
            await page.screenshot(path=str(screenshot_path), full_page=False)
        except Exception as e:
            logger.error(f"Failed to take screenshot for {name}: {e}")
            if screenshot_path is not None:
                self.write_failure_marker(screenshot_path, url or "", str(e))
            return False

        logger.info(f"Screenshot saved: {screenshot_path}")
        return True

    def failure_marker_path(self, screenshot_path: Path) -> Path:
        return screenshot_path.with_name(screenshot_path.stem + self.FAILED_SUFFIX)

    def write_failure_marker(self, screenshot_path: Path, url: str, message: str) -> Optional[Path]:
        marker = self.failure_marker_path(screenshot_path)
        timestamp = format_timestamp(datetime.now(timezone.utc))
        try:
            marker.write_text(
                f"Screenshot failed: {message}\nURL: {url}\nTimestamp: {timestamp}",
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Could not write failure marker {marker}: {e}")
            return None
        return marker
