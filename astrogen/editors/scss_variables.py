"""_variables.scss editor.

Updates three independent groups of SCSS variables:

* colors -- ``$color-<name>: <value>;`` with arbitrary names
* layout -- ``$brakePoint``, ``$containerSize``, ``$containerPadding`` (integers)
* font sizes -- ``$h1`` .. ``$xs`` declared as ``<pc>, <sp>`` integer pairs

Only variables that are already declared are rewritten.  This editor never
creates a variable.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from .models import (
    FONT_SIZE_KEYS,
    LAYOUT_KEYS,
    FontSize,
    FontSizeVariables,
    LayoutVariables,
    ScssVariablesConfig,
    coerce,
)

_COLOR_DECLARATION = re.compile(r"\$color-([\w-]+):\s*([^;]+);")
_FONT_SIZE_DECLARATION = re.compile(
    r"\$(" + "|".join(FONT_SIZE_KEYS) + r"):\s*(\d+),\s*(\d+);"
)


def _color_name(key: str) -> str:
    return key[len("color-"):] if key.startswith("color-") else key


def _layout_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"\${re.escape(key)}:\s*\d+;")


def _font_size_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"\${re.escape(key)}:\s*\d+,\s*\d+;")


# ---------------------------------------------------------------------------
# Read-back
# ---------------------------------------------------------------------------

def parse_scss_variables(content: str) -> ScssVariablesConfig:
    """Extract the current colors, layout metrics and font sizes."""
    colors = {
        match.group(1): match.group(2).strip()
        for match in _COLOR_DECLARATION.finditer(content)
    }

    layout: dict[str, int] = {}
    for key in LAYOUT_KEYS:
        match = re.search(rf"\${key}:\s*(\d+);", content)
        if match:
            layout[key] = int(match.group(1))

    font_sizes: dict[str, dict[str, int]] = {}
    for match in _FONT_SIZE_DECLARATION.finditer(content):
        font_sizes.setdefault(
            match.group(1), {"pc": int(match.group(2)), "sp": int(match.group(3))}
        )

    return ScssVariablesConfig(
        colors=colors,
        layout=LayoutVariables.model_validate(layout) if layout else None,
        font_sizes=FontSizeVariables.model_validate(font_sizes) if font_sizes else None,
    )


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------

def update_scss_colors(content: str, colors: Mapping[str, str]) -> str:
    """Rewrite the value of each ``$color-<name>`` already declared."""
    updated = content
    for key, value in colors.items():
        if value is None:
            continue
        name = _color_name(key)
        replacement = f"$color-{name}: {value};"
        updated = re.sub(
            rf"\$color-{re.escape(name)}:\s*[^;]+;",
            lambda _match: replacement,
            updated,
        )
    return updated


def update_scss_layout(content: str, layout: LayoutVariables | Mapping[str, Any]) -> str:
    """Rewrite the first declaration of each layout metric that is set."""
    updated = content
    for key, value in coerce(LayoutVariables, layout).assignments().items():
        updated = _layout_pattern(key).sub(f"${key}: {value};", updated, count=1)
    return updated


def update_scss_font_sizes(
    content: str, font_sizes: FontSizeVariables | Mapping[str, Any]
) -> str:
    """Rewrite both components of each declared font-size pair that is set."""
    updated = content
    sizes: dict[str, FontSize] = coerce(FontSizeVariables, font_sizes).assignments()
    for key, size in sizes.items():
        updated = _font_size_pattern(key).sub(f"${key}: {size.pc}, {size.sp};", updated)
    return updated


def update_scss_variables(
    content: str, config: ScssVariablesConfig | Mapping[str, Any]
) -> str:
    """Apply color, layout and font-size updates, in that order."""
    config = coerce(ScssVariablesConfig, config)
    updated = content
    if config.colors:
        updated = update_scss_colors(updated, config.colors)
    if config.layout is not None:
        updated = update_scss_layout(updated, config.layout)
    if config.font_sizes is not None:
        updated = update_scss_font_sizes(updated, config.font_sizes)
    return updated
