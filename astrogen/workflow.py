"""Project-level patch workflow.

Reads each target file, runs the matching editor, and writes the result back
only when the text changed.  Files are handled independently: a failure on a
later file does not roll back earlier writes.

Usage::

    from astrogen.config import Config
    from astrogen.workflow import ProjectPatcher

    patcher = ProjectPatcher(Config(project_root=Path("./site")))
    report = patcher.apply(PatchRequest(pattern="tab", colors={"prime": "#222"}))
    print("\\n".join(report.lines()))
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, Field

from astrogen.config import Config
from astrogen.editors import (
    CommonUpdateConfig,
    PatchRequest,
    ScssVariablesConfig,
    UIPattern,
    required_scripts,
    scan_scripts,
    update_app_js,
    update_common_astro,
    update_scss_variables,
)
from astrogen.editors.models import coerce
from astrogen.intent import (
    PageIntent,
    PageType,
    SectionIntent,
    parse_page_intent,
    parse_section_intent,
)
from astrogen.report import PatchOutcome, PatchReport, PatchStatus
from astrogen.scaffolder import (
    Breadcrumb,
    PageData,
    PageRenderer,
    SectionOptions,
    SectionRenderer,
)
from astrogen.utils import read_text, sanitize_name, write_text


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when a target cannot be read or written, or a request is rejected."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class SectionResult(BaseModel):
    """Outcome of scaffolding one section and wiring its scripts."""

    path: str = Field(..., description="Where the section markup was written")
    pattern: UIPattern
    intent: Optional[SectionIntent] = Field(
        default=None, description="Classifier output when the pattern came from a prompt"
    )
    report: PatchReport = Field(default_factory=PatchReport)


class PageResult(BaseModel):
    """Outcome of scaffolding one page."""

    page: str = Field(..., description="Sanitised page name")
    path: str = Field(..., description="Where the page markup was written")
    intent: PageIntent
    sections: list[str] = Field(default_factory=list)
    missing_sections: list[str] = Field(
        default_factory=list, description="Imported section files that do not exist yet"
    )


# ---------------------------------------------------------------------------
# ProjectPatcher
# ---------------------------------------------------------------------------


class ProjectPatcher:
    """Applies declarative change requests to an Astro project on disk.

    Attributes:
        config: Project layout configuration.
        renderer: Section template renderer used by :meth:`scaffold_section`.
        page_renderer: Page template renderer used by :meth:`scaffold_page`.
    """

    def __init__(
        self,
        config: Config,
        renderer: SectionRenderer | None = None,
        page_renderer: PageRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or SectionRenderer()
        self.page_renderer = page_renderer or PageRenderer()

    # -- Single-file patching ----------------------------------------------

    def _patch_file(
        self,
        target: str,
        path: Path,
        transform: Callable[[str], str],
        detail: str = "",
    ) -> PatchOutcome:
        """Read *path*, apply *transform*, write back when changed."""
        if not path.exists():
            return PatchOutcome(target=target, path=str(path), status=PatchStatus.MISSING)

        try:
            original = read_text(path)
        except OSError as exc:
            raise ScaffoldError(f"Cannot read {path}: {exc}", path=path) from exc

        updated = transform(original)
        if updated == original:
            return PatchOutcome(target=target, path=str(path), status=PatchStatus.UNCHANGED)

        try:
            write_text(path, updated)
        except OSError as exc:
            raise ScaffoldError(f"Cannot write {path}: {exc}", path=path) from exc

        return PatchOutcome(
            target=target, path=str(path), status=PatchStatus.UPDATED, detail=detail
        )

    # -- Public API --------------------------------------------------------

    def wire_ui_pattern(self, pattern: UIPattern | str) -> PatchOutcome:
        """Register the scripts *pattern* needs in ``app.js``."""
        path = self.config.app_js
        scripts = required_scripts(pattern)
        if not scripts:
            name = pattern.value if isinstance(pattern, UIPattern) else pattern
            return PatchOutcome(
                target="app.js",
                path=str(path),
                status=PatchStatus.SKIPPED,
                detail=f"pattern '{name}' needs no scripts",
            )

        unactivated: list[str] = []

        def _transform(content: str) -> str:
            updated = update_app_js(content, scripts)
            unactivated.extend(scan_scripts(updated).missing_activations(scripts))
            return updated

        outcome = self._patch_file(
            "app.js", path, _transform, detail=f"registered {', '.join(scripts)}"
        )
        if unactivated:
            missing = f"load block not found, {', '.join(unactivated)} not activated"
            if outcome.status == PatchStatus.UPDATED:
                outcome.detail = f"declared {', '.join(scripts)}; {missing}"
            elif outcome.status == PatchStatus.UNCHANGED:
                outcome.detail = missing
        return outcome

    def update_site_config(
        self, update: CommonUpdateConfig | Mapping[str, Any]
    ) -> PatchOutcome:
        """Apply head/menu changes to ``Common.astro``."""
        update = coerce(CommonUpdateConfig, update)
        parts = [name for name in ("head", "menu") if getattr(update, name) is not None]
        return self._patch_file(
            "Common.astro",
            self.config.common,
            lambda content: update_common_astro(content, update),
            detail=f"patched {' and '.join(parts)}" if parts else "",
        )

    def update_style_variables(
        self, update: ScssVariablesConfig | Mapping[str, Any]
    ) -> PatchOutcome:
        """Apply color/layout/font-size changes to ``_variables.scss``."""
        update = coerce(ScssVariablesConfig, update)
        return self._patch_file(
            "_variables.scss",
            self.config.variables,
            lambda content: update_scss_variables(content, update),
        )

    def apply(self, request: PatchRequest | Mapping[str, Any]) -> PatchReport:
        """Apply every section of *request*, one file at a time.

        Sections that are absent from the request are reported as skipped.
        """
        request = coerce(PatchRequest, request)
        report = PatchReport()

        if request.pattern is not None:
            report.add(self.wire_ui_pattern(request.pattern))
        else:
            report.add(_skipped("app.js", self.config.app_js))

        common_update = request.common_update()
        if common_update is not None:
            report.add(self.update_site_config(common_update))
        else:
            report.add(_skipped("Common.astro", self.config.common))

        scss_update = request.scss_update()
        if scss_update is not None:
            report.add(self.update_style_variables(scss_update))
        else:
            report.add(_skipped("_variables.scss", self.config.variables))

        return report

    async def scaffold_section(
        self,
        page_name: str,
        section_name: str,
        *,
        pattern: UIPattern | str | None = None,
        prompt: str | None = None,
        options: SectionOptions | None = None,
        components: list[str] | None = None,
    ) -> SectionResult:
        """Write a new section file and wire the scripts its pattern needs.

        The pattern is taken from *pattern* when given, otherwise classified
        from *prompt*.

        Raises:
            ScaffoldError: If neither *pattern* nor *prompt* is given, or the
                classifier confidence is below ``config.min_confidence``.
        """
        intent: SectionIntent | None = None
        if pattern is None:
            if not prompt:
                raise ScaffoldError("Either a UI pattern or a prompt is required")
            intent = parse_section_intent(prompt)
            if intent.confidence < self.config.min_confidence:
                raise ScaffoldError(
                    f"Prompt too vague (confidence {intent.confidence:.2f} < "
                    f"{self.config.min_confidence:.2f}): {prompt!r}"
                )
            pattern = intent.ui_pattern

        ui_pattern = UIPattern(pattern)
        target = self.config.section_path(sanitize_name(page_name), sanitize_name(section_name))
        try:
            written = await self.renderer.render_to_file(
                ui_pattern,
                target,
                options=options,
                components=components,
                section_name=section_name,
            )
        except OSError as exc:
            raise ScaffoldError(f"Cannot write {target}: {exc}", path=target) from exc

        report = PatchReport()
        report.add(self.wire_ui_pattern(ui_pattern))
        return SectionResult(path=str(written), pattern=ui_pattern, intent=intent, report=report)

    async def scaffold_page(
        self,
        page_name: str,
        data: PageData | Mapping[str, Any],
        *,
        sections: list[str] | None = None,
        prompt: str | None = None,
    ) -> PageResult:
        """Write ``<pages_dir>/<page>/index.astro`` placing *sections* in order.

        The page intent, classified from *prompt* and the page name, decides
        whether a lower page without breadcrumbs gets the default trail.
        Section files that are not generated yet are listed in the result.

        Raises:
            ScaffoldError: If the page name is empty or the file cannot be written.
        """
        page = sanitize_name(page_name)
        if not page:
            raise ScaffoldError(f"Invalid page name: {page_name!r}")

        page_data = coerce(PageData, data)
        section_names = [name for name in map(sanitize_name, sections or []) if name]
        intent = parse_page_intent(prompt or "", page)
        if page_data.breadcrumbs is None and intent.page_type == PageType.LOWER:
            page_data = page_data.model_copy(
                update={"breadcrumbs": _default_breadcrumbs(page_data, page)}
            )

        target = self.config.page_path(page)
        try:
            written = await self.page_renderer.render_to_file(
                page, page_data, section_names, target
            )
        except OSError as exc:
            raise ScaffoldError(f"Cannot write {target}: {exc}", path=target) from exc

        missing = [
            name for name in section_names if not self.config.section_path(page, name).exists()
        ]
        return PageResult(
            page=page,
            path=str(written),
            intent=intent,
            sections=section_names,
            missing_sections=missing,
        )


def _skipped(target: str, path: Path) -> PatchOutcome:
    return PatchOutcome(target=target, path=str(path), status=PatchStatus.SKIPPED)


def _default_breadcrumbs(data: PageData, page: str) -> list[Breadcrumb]:
    return [
        Breadcrumb(text="TOP", link="/"),
        Breadcrumb(text=data.head.ttl, link=data.head.url or f"/{page}/"),
    ]
