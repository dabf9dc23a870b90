"""Keyword-based intent classifier.

Turns a short natural-language request ("show the FAQ as an accordion",
"記事一覧をカード形式で表示") into a content type, a UI pattern and a
confidence score.  Pure keyword matching -- no AI calls.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from astrogen.editors.models import UIPattern


# ---------------------------------------------------------------------------
# Keyword tables (first match wins, so order matters)
# ---------------------------------------------------------------------------

_PATTERN_KEYWORDS: tuple[tuple[str, UIPattern], ...] = (
    ("タブ", UIPattern.TAB),
    ("tab", UIPattern.TAB),
    ("アコーディオン", UIPattern.ACCORDION),
    ("accordion", UIPattern.ACCORDION),
    ("グリッド", UIPattern.GRID),
    ("grid", UIPattern.GRID),
    ("カード", UIPattern.GRID),
    ("card", UIPattern.GRID),
    ("カルーセル", UIPattern.CAROUSEL),
    ("carousel", UIPattern.CAROUSEL),
    ("スライダー", UIPattern.CAROUSEL),
    ("slider", UIPattern.CAROUSEL),
    ("リスト", UIPattern.LIST),
    ("list", UIPattern.LIST),
    ("モーダル", UIPattern.MODAL),
    ("modal", UIPattern.MODAL),
    ("ギャラリー", UIPattern.MODAL),
    ("gallery", UIPattern.MODAL),
)

# Each group adds to the confidence once when any of its keywords is present.
_PATTERN_KEYWORD_GROUPS: tuple[tuple[str, ...], ...] = (
    ("タブ", "tab"),
    ("アコーディオン", "accordion"),
    ("グリッド", "grid"),
    ("カード", "card"),
    ("カルーセル", "carousel"),
    ("スライダー", "slider"),
    ("リスト", "list"),
    ("モーダル", "modal"),
    ("ギャラリー", "gallery"),
)

_CONTENT_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("記事", "articles"),
    ("article", "articles"),
    ("ブログ", "articles"),
    ("blog", "articles"),
    ("カテゴリ", "categories"),
    ("category", "categories"),
    ("カテゴリー", "categories"),
    ("categories", "categories"),
    ("q&a", "qa"),
    ("qa", "qa"),
    ("質問", "qa"),
    ("faq", "qa"),
    ("機能", "features"),
    ("feature", "features"),
    ("技術", "tech"),
    ("tech", "tech"),
    ("technology", "tech"),
    ("動画", "videos"),
    ("video", "videos"),
    ("画像", "gallery"),
    ("image", "gallery"),
    ("ギャラリー", "gallery"),
    ("gallery", "gallery"),
)

_LOWER_PAGE_KEYWORDS = (
    "下層", "サブ", "詳細", "子ページ", "about", "service", "contact",
    "company", "news", "blog", "products", "recruit",
)
_TOP_PAGE_KEYWORDS = ("トップ", "ホーム", "top", "home", "index", "メイン")
_TOP_PAGE_NAMES = ("top", "index", "home")

DEFAULT_PATTERN = UIPattern.GRID
DEFAULT_CONTENT_TYPE = "custom"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class PageType(str, Enum):
    """Whether a page is the site top or a lower-level page."""
    TOP = "top"
    LOWER = "lower"


class SectionIntent(BaseModel):
    """Classifier output for a section request."""
    content_type: str = Field(..., description="e.g. 'articles', 'qa', 'custom'")
    ui_pattern: UIPattern = Field(..., description="UI pattern to build the section on")
    confidence: float = Field(..., ge=0.0, le=1.0)


class PageIntent(BaseModel):
    """Classifier output for a page request."""
    page_type: PageType
    confidence: float = Field(..., ge=0.0, le=1.0)


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def detect_ui_pattern(prompt: str) -> UIPattern:
    """Return the first UI pattern whose keyword occurs in *prompt*."""
    for keyword, pattern in _PATTERN_KEYWORDS:
        if keyword in prompt:
            return pattern
    return DEFAULT_PATTERN


def detect_content_type(prompt: str) -> str:
    """Return the first content type whose keyword occurs in *prompt*."""
    for keyword, content_type in _CONTENT_KEYWORDS:
        if keyword in prompt:
            return content_type
    return DEFAULT_CONTENT_TYPE


def calculate_confidence(prompt: str, content_type: str) -> float:
    """Score how explicit *prompt* is, between 0.5 and 1.0.

    +0.3 per pattern keyword group present, +0.2 when a content type was
    recognised.
    """
    confidence = 0.5
    for group in _PATTERN_KEYWORD_GROUPS:
        if any(keyword in prompt for keyword in group):
            confidence += 0.3
    if content_type != DEFAULT_CONTENT_TYPE:
        confidence += 0.2
    return round(min(confidence, 1.0), 2)


def parse_section_intent(prompt: str) -> SectionIntent:
    """Classify a section request."""
    normalized = prompt.lower()
    pattern = detect_ui_pattern(normalized)
    content_type = detect_content_type(normalized)
    return SectionIntent(
        content_type=content_type,
        ui_pattern=pattern,
        confidence=calculate_confidence(normalized, content_type),
    )


def parse_page_intent(prompt: str, page_name: str | None = None) -> PageIntent:
    """Decide whether *prompt* describes the top page or a lower page.

    Top-page keywords win over lower-page keywords; the page name is only a
    weaker hint.  With no signal at all the top page is assumed.
    """
    normalized = prompt.lower()
    has_top = any(keyword in normalized for keyword in _TOP_PAGE_KEYWORDS)
    has_lower = any(keyword in normalized for keyword in _LOWER_PAGE_KEYWORDS)

    if has_top or page_name in _TOP_PAGE_NAMES:
        return PageIntent(page_type=PageType.TOP, confidence=0.9 if has_top else 0.7)
    if has_lower:
        return PageIntent(page_type=PageType.LOWER, confidence=0.9)
    if page_name:
        return PageIntent(page_type=PageType.LOWER, confidence=0.6)
    # Nothing to go on: assume the top page.
    return PageIntent(page_type=PageType.TOP, confidence=0.3)
