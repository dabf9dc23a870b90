"""Page scaffolding.

Renders ``src/pages/<page>/index.astro``: a ``Layout`` wrapper holding the
page's ``head`` record, optional lower-page title and breadcrumbs, and one
``<section>`` per section component generated under ``_parts/_<page>/``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from astrogen.scaffolder.templates import _DEFAULT_TEMPLATE_DIR, build_environment
from astrogen.utils import write_text

PAGE_TEMPLATE = "pages/page.astro.j2"

# Sections whose components receive the page image directory.
IMAGE_SECTIONS: tuple[str, ...] = ("articles", "videos")


# ---------------------------------------------------------------------------
# Page data models
# ---------------------------------------------------------------------------

class PageHead(BaseModel):
    """Per-page ``<head>`` values passed to the layout."""

    model_config = ConfigDict(extra="forbid")

    slug: str = Field(..., description="Page slug, also the image directory name")
    ttl: str = Field(..., description="Page title")
    description: str = Field(default="")
    url: str = Field(default="", description="Canonical path, e.g. '/about/'")


class Breadcrumb(BaseModel):
    text: str
    link: str


class PageData(BaseModel):
    """The ``page`` object embedded in the generated page."""

    model_config = ConfigDict(extra="forbid")

    head: PageHead
    breadcrumbs: Optional[list[Breadcrumb]] = None
    contents: dict[str, Any] = Field(
        default_factory=dict, description="Props for each section, keyed by section name"
    )

    def to_js(self) -> dict[str, Any]:
        """Plain data in the key order the page object is written in."""
        data: dict[str, Any] = {"head": self.head.model_dump()}
        if self.breadcrumbs is not None:
            data["breadcrumbs"] = [crumb.model_dump() for crumb in self.breadcrumbs]
        data["contents"] = self.contents
        return data


# ---------------------------------------------------------------------------
# PageRenderer
# ---------------------------------------------------------------------------


class PageRenderer:
    """Renders Astro page skeletons that import and place section components."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = build_environment(self.template_dir)

    def render(self, page_name: str, data: PageData, sections: list[str]) -> str:
        """Render the page markup.

        Breadcrumbs and the lower-page title are emitted only when
        ``data.breadcrumbs`` is set.
        """
        template = self.env.get_template(PAGE_TEMPLATE)
        return template.render(
            page_name=page_name,
            page_data=data.to_js(),
            breadcrumbs=data.breadcrumbs is not None,
            sections=sections,
            image_sections=IMAGE_SECTIONS,
        )

    async def render_to_file(
        self,
        page_name: str,
        data: PageData,
        sections: list[str],
        output_path: str | Path,
    ) -> Path:
        """Render a page and write it to *output_path*, creating parents."""
        content = self.render(page_name, data, sections)
        return await asyncio.to_thread(write_text, Path(output_path), content)
