"""Tests for GalleryRenderer."""

import json

from pages_gallery.application.gallery_renderer import GalleryRenderer
from pages_gallery.infrastructure.catalog_store import CatalogStore


def full_app(**overrides) -> dict:
    app = {
        "name": "site",
        "description": "A demo app",
        "url": "https://octo.github.io/site",
        "repository": "https://github.com/octo/site",
        "screenshot": "screenshots/octo-site.png",
        "tags": ["Foo", "TypeScript"],
        "language": "TypeScript",
        "stars": 7,
        "forks": 2,
        "updatedAt": "2024-02-03T04:05:06Z",
        "contributors": 3,
        "isElectronApp": False,
        "organization": "octo",
    }
    app.update(overrides)
    return app


class TestRender:
    """Tests for GalleryRenderer.render."""

    def test_one_card_per_app_in_order(self) -> None:
        """Test cards follow catalog order and cycle colour classes."""
        apps = [full_app(name=f"app-{i}") for i in range(9)]

        page = GalleryRenderer().render({"lastUpdated": "2024-07-01T12:30:00.000Z", "apps": apps})

        assert page.count('class="app-card ') == 9
        assert page.index("app-0") < page.index("app-1") < page.index("app-8")
        assert page.count("color-coral\"") == 2
        assert "2024-07-01 12:30 UTC" in page
        assert 'id="error-message"' not in page

    def test_card_contents(self) -> None:
        """Test a fully populated card shows every section."""
        card = GalleryRenderer().render_card(full_app(isElectronApp=True), 0)

        assert '<img src="screenshots/octo-site.png"' in card
        assert "electron-icon" in card
        assert "🏢</span> octo" in card
        assert "A demo app" in card
        assert "Last updated: 2024-02-03" in card
        assert "Contributors: 3" in card
        assert "⭐</span> 7 • <span class=\"meta-icon\">🍴</span> 2" in card
        assert '<span class="app-tag">Foo</span><span class="app-tag">TypeScript</span>' in card
        assert 'href="https://octo.github.io/site"' in card
        assert "View Source" in card

    def test_optional_sections_omitted(self) -> None:
        """Test undefined fields are not shown."""
        app = {"name": "bare", "url": "https://octo.github.io/bare"}

        card = GalleryRenderer().render_card(app, 0)

        assert "Screenshot not available" in card
        assert "electron-icon" not in card
        assert "app-organization" not in card
        assert "app-description" not in card
        assert "app-meta-item" not in card
        assert "app-tags" not in card
        assert "View Source" not in card
        assert "Visit App" in card

    def test_zero_values_are_shown(self) -> None:
        """Test zero contributors and stars still count as defined."""
        card = GalleryRenderer().render_card(full_app(contributors=0, stars=0, forks=0), 0)

        assert "Contributors: 0" in card
        assert "⭐</span> 0" in card

    def test_text_is_escaped(self) -> None:
        """Test catalog text cannot inject markup."""
        card = GalleryRenderer().render_card(full_app(description="<script>alert(1)</script>"), 0)

        assert "<script>" not in card
        assert "&lt;script&gt;" in card

    def test_non_string_timestamps_render(self) -> None:
        """Test numeric timestamps are shown as-is instead of breaking the page."""
        page = GalleryRenderer().render({"lastUpdated": 123, "apps": [full_app(updatedAt=1700000000)]})

        assert '<span id="last-updated">123</span>' in page
        assert "Last updated: 1700000000" in page
        assert 'id="apps-grid"' in page

    def test_unparsable_timestamps_render(self) -> None:
        """Test malformed timestamp strings are shown verbatim."""
        page = GalleryRenderer().render({"lastUpdated": "yesterday", "apps": [full_app(updatedAt="soon")]})

        assert '<span id="last-updated">yesterday</span>' in page
        assert "Last updated: soon" in page

    def test_missing_apps_shows_error(self) -> None:
        """Test a catalog without apps renders the error state."""
        page = GalleryRenderer().render({"lastUpdated": "2024-07-01T12:30:00.000Z"})

        assert 'id="error-message"' in page
        assert 'id="apps-grid"' not in page

    def test_no_catalog_shows_error(self) -> None:
        """Test an unreadable catalog renders the error state with an unknown date."""
        page = GalleryRenderer().render(None)

        assert 'id="error-message"' in page
        assert '<span id="last-updated">Unknown</span>' in page


class TestWrite:
    """Tests for GalleryRenderer.write."""

    def test_writes_gallery(self, tmp_path) -> None:
        """Test a valid catalog renders the grid."""
        catalog_path = tmp_path / "apps-data.json"
        catalog_path.write_text(json.dumps({"lastUpdated": None, "totalApps": 1, "apps": [full_app()]}))
        output = tmp_path / "site" / "index.html"

        rendered = GalleryRenderer().write(CatalogStore(catalog_path), output)

        assert rendered is True
        assert 'id="apps-grid"' in output.read_text(encoding="utf-8")

    def test_missing_catalog_writes_error_page(self, tmp_path) -> None:
        """Test a missing catalog still produces a page, in the error state."""
        output = tmp_path / "index.html"

        rendered = GalleryRenderer().write(CatalogStore(tmp_path / "missing.json"), output)

        assert rendered is False
        assert 'id="error-message"' in output.read_text(encoding="utf-8")
