"""Static HTML gallery generated from the apps catalog."""

import html
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pages_gallery.domain.repository import parse_timestamp
from pages_gallery.infrastructure.catalog_store import CatalogReadError, CatalogStore

logger = logging.getLogger(__name__)

COLOR_CLASSES = [
    "color-coral",
    "color-orange",
    "color-amber",
    "color-emerald",
    "color-blue",
    "color-indigo",
    "color-pink",
    "color-teal",
]

SCREENSHOT_PLACEHOLDER = "<span>Screenshot not available</span>"

PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>GitHub Pages Apps</title>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{ font-family: system-ui, sans-serif; background: #f5f5f7; color: #1d1d1f; }}
        header, footer {{ text-align: center; padding: 2rem 1rem; }}
        .apps-grid {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(320px, 1fr)); gap: 1.5rem; max-width: 1400px; margin: 0 auto; padding: 0 1.5rem; }}
        .app-card {{ background: #fff; border-radius: 12px; overflow: hidden; box-shadow: 0 2px 8px rgba(0,0,0,.08); border-top: 4px solid var(--accent); }}
        .app-screenshot {{ aspect-ratio: 3 / 2; background: #e8e8ed; display: flex; align-items: center; justify-content: center; color: #86868b; }}
        .app-screenshot img {{ width: 100%; height: 100%; object-fit: cover; }}
        .app-content {{ padding: 1rem 1.25rem 1.25rem; }}
        .app-title-container {{ display: flex; align-items: center; gap: .5rem; }}
        .app-title {{ font-size: 1.2rem; }}
        .app-organization, .app-meta-item {{ font-size: .85rem; color: #6e6e73; margin-top: .35rem; }}
        .app-description {{ margin: .75rem 0; }}
        .app-tags {{ display: flex; flex-wrap: wrap; gap: .35rem; margin: .75rem 0; }}
        .app-tag {{ background: #f0f0f5; border-radius: 999px; padding: .15rem .6rem; font-size: .75rem; }}
        .app-links {{ display: flex; gap: .75rem; margin-top: 1rem; }}
        .app-link {{ text-decoration: none; padding: .4rem .9rem; border-radius: 8px; background: var(--accent); color: #fff; font-size: .9rem; }}
        .app-link.secondary {{ background: #f0f0f5; color: #1d1d1f; }}
        .error-message {{ max-width: 600px; margin: 3rem auto; padding: 2rem; background: #fff0f0; border-radius: 12px; text-align: center; }}
        .color-coral {{ --accent: #ff6b6b; }}
        .color-orange {{ --accent: #ff922b; }}
        .color-amber {{ --accent: #f59f00; }}
        .color-emerald {{ --accent: #12b886; }}
        .color-blue {{ --accent: #339af0; }}
        .color-indigo {{ --accent: #5c7cfa; }}
        .color-pink {{ --accent: #f06595; }}
        .color-teal {{ --accent: #20c997; }}
    </style>
</head>
<body>
    <header>
        <h1>GitHub Pages Apps</h1>
    </header>
    <main>
{content}
    </main>
    <footer>
        Last updated: <span id="last-updated">{last_updated}</span>
    </footer>
</body>
</html>
"""

GRID_HTML = """        <div id="apps-container">
            <div id="apps-grid" class="apps-grid">
{cards}
            </div>
        </div>"""

ERROR_HTML = """        <div id="error-message" class="error-message">
            <h2>Unable to load apps</h2>
            <p>The apps catalog could not be loaded. Please try again later.</p>
        </div>"""

APP_CARD_HTML = """<div class="app-card {color_class}">
    <div class="app-screenshot">{screenshot}</div>
    <div class="app-content">
        <div class="app-title-container">
            <h2 class="app-title">{name}</h2>{electron_icon}
        </div>{organization}{description}
        <div class="app-metadata">{metadata}
        </div>{tags}
        <div class="app-links">
            <a href="{url}" class="app-link" target="_blank" rel="noopener noreferrer">🌐 Visit App</a>{repository_link}
        </div>
    </div>
</div>"""


def _escape(value: Any) -> str:
    return html.escape(str(value), quote=True)


def _is_defined(app: Dict[str, Any], key: str) -> bool:
    return app.get(key) is not None


class GalleryRenderer:
    """Renders one card per app, or an error state when the catalog is unusable."""

    def render(self, catalog: Optional[Dict[str, Any]]) -> str:
        """Render the full page for a raw catalog document."""
        if not catalog or not isinstance(catalog.get("apps"), list):
            return self.render_error(catalog)

        cards = "\n".join(self.render_card(app, index) for index, app in enumerate(catalog["apps"]))
        content = GRID_HTML.format(cards=cards)
        return PAGE_HTML.format(content=content, last_updated=self.format_last_updated(catalog))

    def render_error(self, catalog: Optional[Dict[str, Any]] = None) -> str:
        return PAGE_HTML.format(content=ERROR_HTML, last_updated=self.format_last_updated(catalog))

    def render_card(self, app: Dict[str, Any], index: int) -> str:
        color_class = COLOR_CLASSES[index % len(COLOR_CLASSES)]
        name = _escape(app.get("name", ""))

        electron_icon = ""
        if app.get("isElectronApp"):
            electron_icon = '\n            <span class="electron-icon" title="Available as Electron app">⚡</span>'

        organization = ""
        if app.get("organization"):
            organization = (
                f'\n        <div class="app-organization"><span class="org-icon">🏢</span> '
                f'{_escape(app["organization"])}</div>'
            )

        description = ""
        if app.get("description"):
            description = f'\n        <p class="app-description">{_escape(app["description"])}</p>'

        tags = ""
        if app.get("tags"):
            tag_spans = "".join(f'<span class="app-tag">{_escape(tag)}</span>' for tag in app["tags"])
            tags = f'\n        <div class="app-tags">{tag_spans}</div>'

        repository_link = ""
        if app.get("repository"):
            repository_link = (
                f'\n            <a href="{_escape(app["repository"])}" class="app-link secondary" '
                f'target="_blank" rel="noopener noreferrer">📁 View Source</a>'
            )

        return APP_CARD_HTML.format(
            color_class=color_class,
            screenshot=self.render_screenshot(app),
            name=name,
            electron_icon=electron_icon,
            organization=organization,
            description=description,
            metadata="".join(self.metadata_items(app)),
            tags=tags,
            url=_escape(app.get("url", "")),
            repository_link=repository_link,
        )

    def render_screenshot(self, app: Dict[str, Any]) -> str:
        if not app.get("screenshot"):
            return SCREENSHOT_PLACEHOLDER

        placeholder = _escape(SCREENSHOT_PLACEHOLDER)
        return (
            f'<img src="{_escape(app["screenshot"])}" alt="Screenshot of {_escape(app.get("name", ""))}" '
            f'loading="lazy" onerror="this.parentElement.innerHTML=\'{placeholder}\'">'
        )

    def metadata_items(self, app: Dict[str, Any]) -> List[str]:
        items = []
        if _is_defined(app, "updatedAt"):
            items.append(
                f'<span class="meta-icon">📅</span> Last updated: {_escape(self.format_date(app["updatedAt"]))}'
            )
        if _is_defined(app, "contributors"):
            items.append(f'<span class="meta-icon">👥</span> Contributors: {_escape(app["contributors"])}')

        stats = []
        if _is_defined(app, "stars"):
            stats.append(f'<span class="meta-icon">⭐</span> {_escape(app["stars"])}')
        if _is_defined(app, "forks"):
            stats.append(f'<span class="meta-icon">🍴</span> {_escape(app["forks"])}')
        if stats:
            items.append(" • ".join(stats))

        return [f'\n            <div class="app-meta-item">{item}</div>' for item in items]

    @staticmethod
    def format_date(value: Any) -> str:
        if not isinstance(value, str):
            return str(value)
        if not value:
            return value
        try:
            return parse_timestamp(value).strftime("%Y-%m-%d")
        except ValueError:
            return value

    @staticmethod
    def format_last_updated(catalog: Optional[Dict[str, Any]]) -> str:
        if not catalog or not catalog.get("lastUpdated"):
            return "Unknown"
        last_updated = catalog["lastUpdated"]
        if not isinstance(last_updated, str):
            return _escape(last_updated)
        try:
            return parse_timestamp(last_updated).strftime("%Y-%m-%d %H:%M UTC")
        except ValueError:
            return _escape(last_updated)

    def write(self, catalog_store: CatalogStore, output_path: Union[str, Path]) -> bool:
        """
        Render the catalog to `output_path`.

        Returns:
            True if the app grid was rendered, False if the error state was
        """
        try:
            catalog = catalog_store.read()
        except CatalogReadError as e:
            logger.error(f"Error loading apps data: {e}")
            catalog = None

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(catalog), encoding="utf-8")

        if catalog is None:
            return False

        logger.info(f"Rendered {len(catalog['apps'])} apps to {output_path}")
        return True
