"""Tests for the app.js editor.

Covers:
- required_scripts lookup table
- needs_app_js_update trigger
- update_app_js insertion points (imports, load block)
- Ordered merge, idempotence and partial registrations
- Missing anchors (no imports, no load block)
"""

from __future__ import annotations

import textwrap

import pytest

from astrogen.editors.app_js import needs_app_js_update, required_scripts, update_app_js
from astrogen.editors.models import UIPattern
from astrogen.editors.scanner import scan_scripts


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def load_block_only() -> str:
    """A manifest with a load block but no imports or calls."""
    return 'window.addEventListener("load", () => {\n});\n'


# ---------------------------------------------------------------------------
# required_scripts
# ---------------------------------------------------------------------------


class TestRequiredScripts:
    @pytest.mark.parametrize(
        ("pattern", "expected"),
        [
            ("tab", ("Tab",)),
            ("accordion", ("Accordion",)),
            ("modal", ("Modal",)),
            ("carousel", ()),
            ("grid", ()),
            ("list", ()),
        ],
    )
    def test_lookup(self, pattern, expected):
        assert required_scripts(pattern) == expected

    def test_accepts_enum(self):
        assert required_scripts(UIPattern.TAB) == ("Tab",)

    def test_unknown_pattern_needs_nothing(self):
        assert required_scripts("marquee") == ()


# ---------------------------------------------------------------------------
# needs_app_js_update
# ---------------------------------------------------------------------------


class TestNeedsUpdate:
    def test_pattern_without_scripts(self, app_js_text):
        assert needs_app_js_update(app_js_text, "grid") is False

    def test_missing_script(self, app_js_text):
        assert needs_app_js_update(app_js_text, "tab") is True

    def test_already_registered(self, app_js_text):
        updated = update_app_js(app_js_text, required_scripts("tab"))
        assert needs_app_js_update(updated, "tab") is False

    def test_declared_but_not_activated(self):
        content = 'import { Modal } from "./class/Modal.ts";\n'
        assert needs_app_js_update(content, "modal") is True

    def test_activated_but_not_declared(self):
        content = 'window.addEventListener("load", () => {\n  new Modal();\n});\n'
        assert needs_app_js_update(content, "modal") is True


# ---------------------------------------------------------------------------
# update_app_js
# ---------------------------------------------------------------------------


class TestUpdateAppJs:
    def test_inserts_after_last_import_and_last_call(self, app_js_text):
        result = update_app_js(app_js_text, ["Tab", "Accordion"])
        assert result == textwrap.dedent("""\
            import "./lib/polyfill.ts";
            import { Header } from "./class/Header.ts";
            import { Tab } from "./class/Tab.ts";
            import { Accordion } from "./class/Accordion.ts";

            window.addEventListener("load", () => {
              new Header();
              new Tab();
              new Accordion();
            });

            console.log("ready");
            """)

    def test_empty_script_list_is_noop(self, app_js_text):
        assert update_app_js(app_js_text, []) == app_js_text

    def test_already_registered_is_noop(self, app_js_text):
        assert update_app_js(app_js_text, ["Header"]) == app_js_text

    def test_idempotent(self, app_js_text):
        once = update_app_js(app_js_text, ["Tab", "Modal"])
        assert update_app_js(once, ["Tab", "Modal"]) == once

    def test_ordered_merge_into_empty_block(self, load_block_only):
        result = update_app_js(load_block_only, ["A", "B"])
        assert result == (
            'import { A } from "./class/A.ts";\n'
            'import { B } from "./class/B.ts";\n'
            'window.addEventListener("load", () => {\n'
            "  new A();\n"
            "  new B();\n"
            "});\n"
        )

    def test_preexisting_script_not_duplicated(self, load_block_only):
        first = update_app_js(load_block_only, ["A"])
        result = update_app_js(first, ["A", "B"])
        assert result.count('import { A } from "./class/A.ts";') == 1
        assert result.count("new A();") == 1
        assert result.index("import { A }") < result.index("import { B }")
        assert result.index("new A();") < result.index("new B();")

    def test_duplicate_request_entries_inserted_once(self, load_block_only):
        result = update_app_js(load_block_only, ["A", "A"])
        assert result.count("import { A }") == 1
        assert result.count("new A();") == 1

    def test_declared_only_gains_activation(self, load_block_only):
        content = 'import { Tab } from "./class/Tab.ts";\n' + load_block_only
        result = update_app_js(content, ["Tab"])
        assert result.count("import { Tab }") == 1
        assert "  new Tab();" in result

    def test_activated_only_gains_declaration(self):
        content = 'window.addEventListener("load", () => {\n  new Tab();\n});\n'
        result = update_app_js(content, ["Tab"])
        assert result.startswith('import { Tab } from "./class/Tab.ts";\n')
        assert result.count("new Tab();") == 1

    def test_no_imports_and_no_load_block(self):
        content = 'console.log("boot");\n'
        result = update_app_js(content, ["A", "B"])
        assert result == (
            'import { A } from "./class/A.ts";\n'
            'import { B } from "./class/B.ts";\n'
            'console.log("boot");\n'
        )
        scan = scan_scripts(result)
        assert scan.declared == {"A", "B"}
        assert scan.activated == set()

    def test_missing_load_block_is_stable(self):
        content = 'console.log("boot");\n'
        once = update_app_js(content, ["A"])
        assert update_app_js(once, ["A"]) == once

    def test_calls_stay_inside_first_block(self):
        content = textwrap.dedent("""\
            window.addEventListener("load", () => {
              new Header();
            });

            document.addEventListener("click", () => {
              new Tracker();
            });
            """)
        result = update_app_js(content, ["Tab"])
        lines = result.split("\n")
        assert lines.index("  new Tab();") == lines.index("  new Header();") + 1
        assert lines.index("  new Tab();") < lines.index("});")

    def test_content_outside_anchors_preserved(self, app_js_text):
        result = update_app_js(app_js_text, ["Modal"])
        assert result.endswith('});\n\nconsole.log("ready");\n')
        assert result.startswith('import "./lib/polyfill.ts";\n')

    def test_multiline_import_kept_intact(self):
        content = textwrap.dedent("""\
            import {
              Header,
            } from "./class/Header.ts";

            window.addEventListener("load", () => {
              new Header();
            });
            """)
        result = update_app_js(content, ["Tab"])
        assert result.startswith(
            "import {\n"
            "  Header,\n"
            '} from "./class/Header.ts";\n'
            'import { Tab } from "./class/Tab.ts";\n'
        )
        assert "  new Header();\n  new Tab();\n});" in result

    def test_load_block_with_trailing_arguments(self):
        content = textwrap.dedent("""\
            window.addEventListener("load", function () {
              new Header();
            }, false);

            document.addEventListener("click", () => {
              new Tracker();
            });
            """)
        result = update_app_js(content, ["Tab"])
        assert "  new Header();\n  new Tab();\n}, false);" in result
        assert "  new Tracker();\n});" in result
