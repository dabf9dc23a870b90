"""astrogen configuration.

Centralised, typed configuration for the scaffolder. Settings use a Pydantic
v2 model so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Global astrogen configuration.

    Holds the project root and the conventional locations of the files the
    editors patch.  Relative locations are resolved against ``project_root``.
    """

    project_root: Path = Field(default=Path("."))
    app_js_path: str = Field(default="src/js/app.js")
    common_path: str = Field(default="src/components/Common.astro")
    variables_path: str = Field(default="src/scss/_variables.scss")
    pages_dir: str = Field(default="src/pages")
    sections_dir: str = Field(default="src/pages/_parts")
    min_confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Classifier confidence below which a prompt is rejected",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def app_js(self) -> Path:
        """Path to the client-side script manifest (``app.js``)."""
        return self.project_root / self.app_js_path

    @property
    def common(self) -> Path:
        """Path to the site-wide ``Common.astro`` configuration."""
        return self.project_root / self.common_path

    @property
    def variables(self) -> Path:
        """Path to the SCSS variable sheet."""
        return self.project_root / self.variables_path

    def section_path(self, page_name: str, section_name: str) -> Path:
        """Where a generated section lives: ``<sections_dir>/_<page>/_<section>.astro``."""
        return self.project_root / self.sections_dir / f"_{page_name}" / f"_{section_name}.astro"

    def page_path(self, page_name: str) -> Path:
        """Where a generated page lives: ``<pages_dir>/<page>/index.astro``."""
        return self.project_root / self.pages_dir / page_name / "index.astro"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<project_root>/astrogen.json``.

        Returns:
            The path where the file was written.
        """
        target = path or (self.project_root / "astrogen.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            ASTROGEN_ROOT, ASTROGEN_APP_JS, ASTROGEN_COMMON,
            ASTROGEN_VARIABLES, ASTROGEN_PAGES_DIR, ASTROGEN_SECTIONS_DIR,
            ASTROGEN_MIN_CONFIDENCE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("ASTROGEN_ROOT"):
            kwargs["project_root"] = Path(os.environ["ASTROGEN_ROOT"])
        if os.environ.get("ASTROGEN_APP_JS"):
            kwargs["app_js_path"] = os.environ["ASTROGEN_APP_JS"]
        if os.environ.get("ASTROGEN_COMMON"):
            kwargs["common_path"] = os.environ["ASTROGEN_COMMON"]
        if os.environ.get("ASTROGEN_VARIABLES"):
            kwargs["variables_path"] = os.environ["ASTROGEN_VARIABLES"]
        if os.environ.get("ASTROGEN_PAGES_DIR"):
            kwargs["pages_dir"] = os.environ["ASTROGEN_PAGES_DIR"]
        if os.environ.get("ASTROGEN_SECTIONS_DIR"):
            kwargs["sections_dir"] = os.environ["ASTROGEN_SECTIONS_DIR"]
        if os.environ.get("ASTROGEN_MIN_CONFIDENCE"):
            kwargs["min_confidence"] = float(os.environ["ASTROGEN_MIN_CONFIDENCE"])
        return cls(**kwargs)
