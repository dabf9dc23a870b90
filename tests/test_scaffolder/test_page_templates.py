"""Tests for page scaffolding.

Covers:
- PageData validation and object key order
- imports, section placement and image props
- lower-page title and breadcrumbs
- async file rendering
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from astrogen.scaffolder import Breadcrumb, PageData, PageHead, PageRenderer


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> PageRenderer:
    return PageRenderer()


@pytest.fixture
def about_data() -> PageData:
    return PageData(
        head=PageHead(slug="about", ttl="会社概要", description="About us", url="/about/"),
        contents={"faq": {"ttl": "FAQ"}, "articles": []},
    )


# ---------------------------------------------------------------------------
# PageData
# ---------------------------------------------------------------------------


class TestPageData:
    def test_key_order(self, about_data):
        assert list(about_data.to_js()) == ["head", "contents"]

    def test_breadcrumbs_included_when_set(self, about_data):
        data = about_data.model_copy(
            update={"breadcrumbs": [Breadcrumb(text="TOP", link="/")]}
        )
        assert list(data.to_js()) == ["head", "breadcrumbs", "contents"]

    def test_unknown_head_key_rejected(self):
        with pytest.raises(ValidationError):
            PageData.model_validate({"head": {"slug": "a", "ttl": "A", "title": "x"}})

    def test_head_required(self):
        with pytest.raises(ValidationError):
            PageData.model_validate({"contents": {}})


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


class TestRenderPage:
    def test_imports(self, renderer, about_data):
        markup = renderer.render("about", about_data, ["faq", "latest-news"])
        assert markup.startswith('---\nimport Layout from "@/layouts/Layout.astro";\n')
        assert 'import FaqSection from "@/pages/_parts/_about/_faq.astro";' in markup
        assert (
            'import LatestNewsSection from "@/pages/_parts/_about/_latest-news.astro";'
            in markup
        )
        assert 'import "@/scss/pages/_about.scss";' in markup

    def test_page_object(self, renderer, about_data):
        markup = renderer.render("about", about_data, [])
        expected = json.dumps(about_data.to_js(), indent=2, ensure_ascii=False)
        assert f"const page = {expected};" in markup
        assert '"ttl": "会社概要"' in markup

    def test_section_placement(self, renderer, about_data):
        markup = renderer.render("about", about_data, ["faq", "articles", "latest-news"])
        assert '<div class="p_about">' in markup
        assert (
            '      <section id="faq">\n'
            "        <FaqSection faq={page.contents.faq} />\n"
            "      </section>\n"
        ) in markup
        assert (
            "<ArticlesSection articles={page.contents.articles} imgPath={imgPath} />"
            in markup
        )
        assert '<LatestNewsSection latest-news={page.contents["latest-news"]} />' in markup
        assert markup.index('id="faq"') < markup.index('id="articles"')

    def test_no_breadcrumbs(self, renderer, about_data):
        markup = renderer.render("about", about_data, [])
        assert "LowerTitle" not in markup
        assert "Breadcrumbs" not in markup

    def test_breadcrumbs(self, renderer, about_data):
        data = about_data.model_copy(
            update={"breadcrumbs": [Breadcrumb(text="TOP", link="/")]}
        )
        markup = renderer.render("about", data, [])
        assert 'import Breadcrumbs from "@/components/Breadcrumbs.astro";' in markup
        assert "  <LowerTitle title={page.head.ttl} />\n" in markup
        assert "  <Breadcrumbs bread={page.breadcrumbs} />\n" in markup

    def test_no_jinja_leftovers(self, renderer, about_data):
        markup = renderer.render("about", about_data, ["faq"])
        assert "{{" not in markup
        assert "{%" not in markup
        assert markup.endswith("</Layout>\n")


# ---------------------------------------------------------------------------
# File output
# ---------------------------------------------------------------------------


class TestRenderPageToFile:
    @pytest.mark.asyncio
    async def test_writes_file(self, renderer, about_data, tmp_path: Path):
        target = tmp_path / "src" / "pages" / "about" / "index.astro"
        written = await renderer.render_to_file("about", about_data, ["faq"], target)
        assert written == target
        assert target.read_text(encoding="utf-8") == renderer.render(
            "about", about_data, ["faq"]
        )
