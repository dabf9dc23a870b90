"""Jinja2 template rendering for section scaffolding.

Provides the SectionRenderer class which loads Jinja2 templates from the
``astrogen/scaffolder/templates/`` directory and renders Astro section markup
for a UI pattern.  Supports string rendering and async file rendering.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, Field

from astrogen.editors.models import UIPattern
from astrogen.utils import write_text


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

def build_environment(template_dir: Path) -> Environment:
    """Create the Jinja2 environment shared by the section and page renderers."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape([]),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["slugify"] = _slugify_filter
    env.filters["js_bool"] = _js_bool_filter
    env.filters["pascal"] = _pascal_filter
    env.filters["js_object"] = _js_object_filter
    env.filters["member"] = _member_filter
    return env


# ---------------------------------------------------------------------------
# Options model
# ---------------------------------------------------------------------------

class SectionOptions(BaseModel):
    """Per-pattern rendering switches.  Irrelevant options are ignored."""

    columns: int = Field(default=3, ge=1, description="Grid column count")
    gap: str = Field(default="2.4rem", description="Gap between grid items")
    autoplay: bool = Field(default=False, description="Carousel autoplay flag")
    open_first: bool = Field(default=True, description="Open the first accordion item")
    has_image: bool = Field(default=True, description="Render an image slot in grid items")


# ---------------------------------------------------------------------------
# SectionRenderer
# ---------------------------------------------------------------------------


class SectionRenderer:
    """Renders Astro section skeletons from Jinja2 templates.

    Each ``UIPattern`` maps to ``sections/<pattern>.astro.j2``.  The rendered
    markup is written verbatim; it is never patched afterwards.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = build_environment(self.template_dir)

    # -- Rendering ---------------------------------------------------------

    def template_for(self, pattern: UIPattern | str) -> str:
        """Return the template path for *pattern*.

        Raises:
            ValueError: If *pattern* is not a known UI pattern.
        """
        try:
            key = UIPattern(pattern)
        except ValueError:
            raise ValueError(f"Unknown UI pattern: {pattern}") from None
        return f"sections/{key.value}.astro.j2"

    def build_context(
        self,
        pattern: UIPattern | str,
        *,
        options: SectionOptions | None = None,
        components: list[str] | None = None,
        section_name: str = "",
    ) -> dict[str, Any]:
        """Assemble the template context for one section."""
        options = options or SectionOptions()
        components = components or []
        return {
            "pattern": UIPattern(pattern).value,
            "section_name": section_name,
            "components": components,
            "has_picture": "Picture" in components,
            **options.model_dump(),
        }

    def render(
        self,
        pattern: UIPattern | str,
        *,
        options: SectionOptions | None = None,
        components: list[str] | None = None,
        section_name: str = "",
    ) -> str:
        """Render the section markup for *pattern*."""
        template = self.env.get_template(self.template_for(pattern))
        context = self.build_context(
            pattern, options=options, components=components, section_name=section_name
        )
        return template.render(**context)

    async def render_to_file(
        self,
        pattern: UIPattern | str,
        output_path: str | Path,
        *,
        options: SectionOptions | None = None,
        components: list[str] | None = None,
        section_name: str = "",
    ) -> Path:
        """Render a section and write it to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(
            pattern, options=options, components=components, section_name=section_name
        )
        return await asyncio.to_thread(write_text, Path(output_path), content)

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template paths."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            str(p.relative_to(self.template_dir).as_posix())
            for p in self.template_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a class-name-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def _js_bool_filter(value: bool) -> str:
    """Render a Python bool as a JavaScript literal."""
    return "true" if value else "false"


def _pascal_filter(value: str) -> str:
    """``latest-news`` -> ``LatestNews``."""
    return "".join(word[:1].upper() + word[1:] for word in re.split(r"[-_]", value) if word)


def _js_object_filter(value: Any) -> str:
    """Render *value* as a JavaScript object literal (two-space indented JSON)."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def _member_filter(name: str, owner: str) -> str:
    """Property access on *owner*, bracketed when *name* is not an identifier."""
    if re.fullmatch(r"[A-Za-z_$][\w$]*", name):
        return f"{owner}.{name}"
    return f"{owner}[{json.dumps(name)}]"
