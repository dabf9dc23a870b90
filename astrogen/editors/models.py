"""Pydantic v2 models for the text-patch editors.

Defines the directives fed to each editor (script registrations, head scalar
fields, menu trees, SCSS variable groups) together with the fixed key tables
that bound what the editors are allowed to touch.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations & fixed tables
# ---------------------------------------------------------------------------

class UIPattern(str, Enum):
    """UI patterns a generated section can be built on."""
    TAB = "tab"
    ACCORDION = "accordion"
    GRID = "grid"
    CAROUSEL = "carousel"
    LIST = "list"
    MODAL = "modal"


# Client-side classes each pattern needs activated in app.js.  Carousel relies
# on an external slider library, so it registers nothing.
SCRIPT_TABLE: dict[UIPattern, tuple[str, ...]] = {
    UIPattern.TAB: ("Tab",),
    UIPattern.ACCORDION: ("Accordion",),
    UIPattern.MODAL: ("Modal",),
    UIPattern.CAROUSEL: (),
    UIPattern.GRID: (),
    UIPattern.LIST: (),
}

HEAD_KEYS: tuple[str, ...] = (
    "siteName",
    "domain",
    "favicon",
    "ogImg",
    "logo",
    "copyright",
    "webfont",
    "twitterName",
    "facebookID",
)

LAYOUT_KEYS: tuple[str, ...] = ("brakePoint", "containerSize", "containerPadding")

FONT_SIZE_KEYS: tuple[str, ...] = (
    "h1", "h2", "h3", "h4", "h5", "xl", "lg", "base", "sm", "xs",
)


# ---------------------------------------------------------------------------
# Common.astro directives
# ---------------------------------------------------------------------------

class HeadConfig(BaseModel):
    """Scalar fields of the ``head`` record in Common.astro.

    Field names are snake_case; the aliases are the keys as they appear in the
    document.  Unset fields are never written.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    site_name: Optional[str] = Field(default=None, alias="siteName")
    domain: Optional[str] = Field(default=None)
    favicon: Optional[str] = Field(default=None)
    og_img: Optional[str] = Field(default=None, alias="ogImg")
    logo: Optional[str] = Field(default=None)
    copyright: Optional[str] = Field(default=None)
    webfont: Optional[str] = Field(default=None)
    twitter_name: Optional[str] = Field(default=None, alias="twitterName")
    facebook_id: Optional[str] = Field(default=None, alias="facebookID")

    def assignments(self) -> dict[str, str]:
        """Return ``{document_key: value}`` for every field that is set."""
        return self.model_dump(by_alias=True, exclude_none=True)


class MenuItem(BaseModel):
    """One entry of the ``menu`` tree.  ``child`` nests arbitrarily deep."""

    link: str = Field(..., description="Link target, e.g. '/about/'")
    txt: str = Field(..., description="Label shown in the navigation")
    child: list[MenuItem] = Field(default_factory=list)
    anchor: Optional[bool] = Field(default=None, description="Emitted only when set")
    blank: Optional[bool] = Field(default=None, description="Emitted only when set")


MenuItem.model_rebuild()


class CommonUpdateConfig(BaseModel):
    """Changes to apply to Common.astro.  ``None`` leaves a section alone."""

    head: Optional[HeadConfig] = None
    menu: Optional[list[MenuItem]] = None


class CommonSnapshot(BaseModel):
    """What could be read back from an existing Common.astro."""

    head: HeadConfig = Field(default_factory=HeadConfig)
    menu_source: Optional[str] = Field(
        default=None, description="Raw text of the menu collection, brackets included"
    )


# ---------------------------------------------------------------------------
# _variables.scss directives
# ---------------------------------------------------------------------------

class LayoutVariables(BaseModel):
    """The three layout metrics; any other key is rejected."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    brake_point: Optional[int] = Field(default=None, alias="brakePoint", ge=0)
    container_size: Optional[int] = Field(default=None, alias="containerSize", ge=0)
    container_padding: Optional[int] = Field(default=None, alias="containerPadding", ge=0)

    def assignments(self) -> dict[str, int]:
        return self.model_dump(by_alias=True, exclude_none=True)


class FontSize(BaseModel):
    """Desktop/mobile pair, e.g. ``$h1: 64, 40;``."""

    pc: int = Field(..., ge=0)
    sp: int = Field(..., ge=0)


class FontSizeVariables(BaseModel):
    """The ten fixed font-size names; any other key is rejected."""

    model_config = ConfigDict(extra="forbid")

    h1: Optional[FontSize] = None
    h2: Optional[FontSize] = None
    h3: Optional[FontSize] = None
    h4: Optional[FontSize] = None
    h5: Optional[FontSize] = None
    xl: Optional[FontSize] = None
    lg: Optional[FontSize] = None
    base: Optional[FontSize] = None
    sm: Optional[FontSize] = None
    xs: Optional[FontSize] = None

    def assignments(self) -> dict[str, FontSize]:
        return {
            key: getattr(self, key)
            for key in FONT_SIZE_KEYS
            if getattr(self, key) is not None
        }


class ScssVariablesConfig(BaseModel):
    """Changes to apply to _variables.scss."""

    colors: dict[str, str] = Field(
        default_factory=dict,
        description="Color values keyed by name, with or without the 'color-' prefix",
    )
    layout: Optional[LayoutVariables] = None
    font_sizes: Optional[FontSizeVariables] = Field(default=None, alias="fontSizes")

    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Project-level request
# ---------------------------------------------------------------------------

class PatchRequest(BaseModel):
    """A declarative change request covering all three artifacts.

    Every section is optional; an omitted section leaves its file untouched.
    """

    pattern: Optional[UIPattern] = Field(
        default=None, description="UI pattern whose scripts must be wired into app.js"
    )
    head: Optional[HeadConfig] = None
    menu: Optional[list[MenuItem]] = None
    colors: dict[str, str] = Field(default_factory=dict)
    layout: Optional[LayoutVariables] = None
    font_sizes: Optional[FontSizeVariables] = Field(default=None, alias="fontSizes")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def common_update(self) -> Optional[CommonUpdateConfig]:
        if self.head is None and self.menu is None:
            return None
        return CommonUpdateConfig(head=self.head, menu=self.menu)

    def scss_update(self) -> Optional[ScssVariablesConfig]:
        if not self.colors and self.layout is None and self.font_sizes is None:
            return None
        return ScssVariablesConfig(
            colors=self.colors, layout=self.layout, font_sizes=self.font_sizes
        )


def coerce(model: type[BaseModel], value: Any) -> Any:
    """Accept either a model instance or a plain mapping for *model*."""
    if isinstance(value, model):
        return value
    return model.model_validate(value)
