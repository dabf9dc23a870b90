"""Signature scanning for the script manifest (app.js).

Reconstructs, from raw text, which script classes are already imported and
which are already instantiated.  State is rebuilt on every call; the file on
disk is the only source of truth.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------

DECLARATION_PATTERN = re.compile(r"import\s+{\s*(\w+)\s*}\s+from")
ACTIVATION_PATTERN = re.compile(r"new\s+(\w+)\(\)")


def declaration_line(identifier: str) -> str:
    """Return the import statement that declares *identifier*."""
    return f'import {{ {identifier} }} from "./class/{identifier}.ts";'


def activation_line(identifier: str) -> str:
    """Return the indented call that activates *identifier* on load."""
    return f"  new {identifier}();"


# ---------------------------------------------------------------------------
# Scan result
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ScriptScan:
    """Identifiers found in a manifest, split by signature kind."""

    declared: set[str] = field(default_factory=set)
    activated: set[str] = field(default_factory=set)

    def missing_declarations(self, identifiers: list[str] | tuple[str, ...]) -> list[str]:
        """Return *identifiers* lacking an import, in request order."""
        return _ordered_unique(i for i in identifiers if i not in self.declared)

    def missing_activations(self, identifiers: list[str] | tuple[str, ...]) -> list[str]:
        """Return *identifiers* lacking a ``new X()`` call, in request order."""
        return _ordered_unique(i for i in identifiers if i not in self.activated)

    def is_registered(self, identifier: str) -> bool:
        return identifier in self.declared and identifier in self.activated


def scan_scripts(content: str) -> ScriptScan:
    """Scan every line of *content* for declaration and activation signatures."""
    scan = ScriptScan()
    for line in content.split("\n"):
        declared = DECLARATION_PATTERN.search(line)
        if declared:
            scan.declared.add(declared.group(1))
        activated = ACTIVATION_PATTERN.search(line)
        if activated:
            scan.activated.add(activated.group(1))
    return scan


def _ordered_unique(items) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
