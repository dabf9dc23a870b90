"""Common.astro editor.

Patches the site-wide configuration document: the flat ``head`` record of
quoted scalar fields and the nested ``menu`` collection.  Scalar updates only
rewrite values of keys that already exist; the menu is regenerated wholesale.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from .anchors import keyed_span
from .models import (
    HEAD_KEYS,
    CommonSnapshot,
    CommonUpdateConfig,
    HeadConfig,
    MenuItem,
    coerce,
)

_QUOTED_VALUE = r'"(?:[^"\\\n]|\\.)*"'

# Control characters that must be written as escapes inside a string literal.
_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}
_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


def _quote(value: Any) -> str:
    """Render *value* as a double-quoted, single-line literal."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    for char, escape in _ESCAPES.items():
        escaped = escaped.replace(char, escape)
    return f'"{escaped}"'


def _unquote(literal: str) -> str:
    return re.sub(
        r"\\(.)",
        lambda match: _UNESCAPES.get(match.group(1), match.group(1)),
        literal[1:-1],
    )


def _scalar_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"(\b{re.escape(key)}:\s*){_QUOTED_VALUE}")


# ---------------------------------------------------------------------------
# Read-back
# ---------------------------------------------------------------------------

def parse_common_astro(content: str) -> CommonSnapshot:
    """Read the ``head`` scalars and the raw ``menu`` source from *content*.

    Only the keys listed in ``HEAD_KEYS`` are extracted.  The menu is
    returned as text; it is never parsed into items.
    """
    values: dict[str, str] = {}
    head_span = keyed_span(content, "head", "{")
    if head_span is not None:
        body = head_span.value(content)
        for key in HEAD_KEYS:
            match = _scalar_pattern(key).search(body)
            if match:
                values[key] = _unquote(match.group(0)[len(match.group(1)):])

    menu_span = keyed_span(content, "menu", "[")
    return CommonSnapshot(
        head=HeadConfig.model_validate(values),
        menu_source=menu_span.value(content) if menu_span else None,
    )


# ---------------------------------------------------------------------------
# head
# ---------------------------------------------------------------------------

def update_common_head(content: str, head: HeadConfig | Mapping[str, Any]) -> str:
    """Replace the quoted value of every existing ``key: "..."`` assignment.

    Keys absent from *content* are skipped, never inserted.
    """
    updates = coerce(HeadConfig, head).assignments()
    updated = content
    for key, value in updates.items():
        literal = _quote(value)
        updated = _scalar_pattern(key).sub(
            lambda match: match.group(1) + literal, updated
        )
    return updated


# ---------------------------------------------------------------------------
# menu
# ---------------------------------------------------------------------------

def format_menu_array(items: Sequence[MenuItem], indent: int = 2) -> str:
    """Serialise *items* into the bracketed record syntax used by Common.astro.

    Each nesting level adds four spaces on top of *indent*.  ``anchor`` and
    ``blank`` appear only when set on the item.
    """
    spaces = " " * indent
    lines = ["["]
    for index, item in enumerate(items):
        lines.append(f"{spaces}  {{")
        lines.append(f"{spaces}    link: {_quote(item.link)},")
        lines.append(f"{spaces}    txt: {_quote(item.txt)},")
        if item.anchor is not None:
            lines.append(f"{spaces}    anchor: {str(item.anchor).lower()},")
        if item.blank is not None:
            lines.append(f"{spaces}    blank: {str(item.blank).lower()},")
        if item.child:
            lines.append(f"{spaces}    child: {format_menu_array(item.child, indent + 4)},")
        trailer = "," if index < len(items) - 1 else ""
        lines.append(f"{spaces}  }}{trailer}")
    lines.append(f"{spaces}]")
    return "\n".join(lines)


def update_common_menu(
    content: str, menu: Sequence[MenuItem | Mapping[str, Any]]
) -> str:
    """Replace the whole ``menu: [...]`` assignment with *menu*.

    Returns *content* unchanged when no ``menu:`` collection exists.
    """
    span = keyed_span(content, "menu", "[")
    if span is None:
        return content
    items = [coerce(MenuItem, item) for item in menu]
    return content[:span.start] + f"menu: {format_menu_array(items)}" + content[span.end:]


# ---------------------------------------------------------------------------
# Whole document
# ---------------------------------------------------------------------------

def update_common_astro(
    content: str, config: CommonUpdateConfig | Mapping[str, Any]
) -> str:
    """Apply the head update, then the menu replacement."""
    config = coerce(CommonUpdateConfig, config)
    updated = content
    if config.head is not None:
        updated = update_common_head(updated, config.head)
    if config.menu is not None:
        updated = update_common_menu(updated, config.menu)
    return updated
