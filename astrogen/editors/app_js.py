"""app.js editor.

Registers the client-side classes a UI pattern depends on: each class needs
an ``import { X } from "./class/X.ts";`` declaration and a ``new X();``
activation inside the ``window.addEventListener("load", ...)`` block.
"""

from __future__ import annotations

from .anchors import activation_insert_index, last_declaration_index
from .models import SCRIPT_TABLE, UIPattern
from .scanner import activation_line, declaration_line, scan_scripts


def required_scripts(pattern: UIPattern | str) -> tuple[str, ...]:
    """Return the script classes *pattern* needs, in registration order.

    Unknown pattern names need nothing.
    """
    try:
        key = UIPattern(pattern)
    except ValueError:
        return ()
    return SCRIPT_TABLE.get(key, ())


def needs_app_js_update(content: str, pattern: UIPattern | str) -> bool:
    """Return ``True`` when any required script lacks its import or its call."""
    scripts = required_scripts(pattern)
    if not scripts:
        return False
    scan = scan_scripts(content)
    return bool(scan.missing_declarations(scripts) or scan.missing_activations(scripts))


def update_app_js(content: str, scripts: list[str] | tuple[str, ...]) -> str:
    """Merge *scripts* into the manifest *content*.

    Declarations and activations are handled independently per script, so a
    class that is imported but never instantiated only gains the ``new``
    call.  New imports follow the last existing import (or open the file);
    new calls follow the last call inside the load block.  Without a load
    block the calls are dropped and only the imports are added.

    Returns *content* unchanged when every script is already registered.
    """
    if not scripts:
        return content

    scan = scan_scripts(content)
    to_declare = scan.missing_declarations(scripts)
    to_activate = scan.missing_activations(scripts)
    if not to_declare and not to_activate:
        return content

    lines = content.split("\n")

    if to_declare:
        new_imports = [declaration_line(script) for script in to_declare]
        last_import = last_declaration_index(lines)
        if last_import == -1:
            lines = new_imports + lines
        else:
            lines[last_import + 1:last_import + 1] = new_imports

    if to_activate:
        anchor = activation_insert_index(lines)
        if anchor is not None:
            lines[anchor + 1:anchor + 1] = [activation_line(script) for script in to_activate]

    return "\n".join(lines)
