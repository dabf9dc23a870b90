"""Shared pytest fixtures for the astrogen test suite.

Provides reusable fixtures for:
- Sample artifacts (app.js, Common.astro, _variables.scss)
- A temporary Astro project tree holding those artifacts
- A Config pointing at that tree
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from astrogen.config import Config


# ---------------------------------------------------------------------------
# Sample artifacts
# ---------------------------------------------------------------------------

@pytest.fixture
def app_js_text() -> str:
    """An app.js with one registered script inside the load block."""
    return textwrap.dedent("""\
        import "./lib/polyfill.ts";
        import { Header } from "./class/Header.ts";

        window.addEventListener("load", () => {
          new Header();
        });

        console.log("ready");
        """)


@pytest.fixture
def common_astro_text() -> str:
    """A Common.astro with a head record and a two-item menu."""
    return textwrap.dedent("""\
        ---
        export const common = {
          head: {
            siteName: "Old",
            domain: "https://example.com",
            favicon: "/favicon.ico",
            ogImg: "/ogp.png",
            copyright: "Example Inc.",
          },
          menu: [
            {
              link: "/",
              txt: "Home",
            },
            {
              link: "/about/",
              txt: "About",
            }
          ],
          footerNote: "keep me",
        };
        ---
        """)


@pytest.fixture
def variables_scss_text() -> str:
    """A _variables.scss declaring a subset of every variable group."""
    return textwrap.dedent("""\
        // colors
        $color-body: #fff;
        $color-txt: #333;
        $color-prime: #111;
        $color-prime-dark: #000;

        // layout
        $brakePoint: 768;
        $containerSize: 1200;

        // font sizes (pc, sp)
        $h1: 64, 40;
        $h2: 48, 32;
        $base: 16, 14;
        """)


# ---------------------------------------------------------------------------
# Project tree
# ---------------------------------------------------------------------------

@pytest.fixture
def project_config(tmp_path: Path) -> Config:
    """Config rooted at an empty temporary directory."""
    return Config(project_root=tmp_path / "site")


@pytest.fixture
def project_root(
    project_config: Config,
    app_js_text: str,
    common_astro_text: str,
    variables_scss_text: str,
) -> Path:
    """Temporary Astro project with all three patch targets present."""
    for path, content in (
        (project_config.app_js, app_js_text),
        (project_config.common, common_astro_text),
        (project_config.variables, variables_scss_text),
    ):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    yield project_config.project_root
