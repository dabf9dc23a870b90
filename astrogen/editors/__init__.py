"""Incremental text-patch editors for previously generated project files.

Each editor is a set of pure ``str -> str`` functions: they re-derive what
they need from the text on every call, splice in only what is missing, and
return the input unchanged when there is nothing to do.

Usage::

    from astrogen.editors import required_scripts, update_app_js

    content = update_app_js(content, required_scripts("tab"))
"""

from astrogen.editors.app_js import needs_app_js_update, required_scripts, update_app_js
from astrogen.editors.common import (
    format_menu_array,
    parse_common_astro,
    update_common_astro,
    update_common_head,
    update_common_menu,
)
from astrogen.editors.models import (
    CommonSnapshot,
    CommonUpdateConfig,
    FontSize,
    FontSizeVariables,
    HeadConfig,
    LayoutVariables,
    MenuItem,
    PatchRequest,
    ScssVariablesConfig,
    UIPattern,
)
from astrogen.editors.scanner import ScriptScan, scan_scripts
from astrogen.editors.scss_variables import (
    parse_scss_variables,
    update_scss_colors,
    update_scss_font_sizes,
    update_scss_layout,
    update_scss_variables,
)

__all__ = [
    "CommonSnapshot",
    "CommonUpdateConfig",
    "FontSize",
    "FontSizeVariables",
    "HeadConfig",
    "LayoutVariables",
    "MenuItem",
    "PatchRequest",
    "ScriptScan",
    "ScssVariablesConfig",
    "UIPattern",
    "format_menu_array",
    "needs_app_js_update",
    "parse_common_astro",
    "parse_scss_variables",
    "required_scripts",
    "scan_scripts",
    "update_app_js",
    "update_common_astro",
    "update_common_head",
    "update_common_menu",
    "update_scss_colors",
    "update_scss_font_sizes",
    "update_scss_layout",
    "update_scss_variables",
]
