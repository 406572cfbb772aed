"""
Output sanitization for user-supplied bookmark text.

Stored values are never touched; this runs when a bookmark is serialized.
Whitelisted formatting tags survive with their safe attributes, everything
else is escaped so it renders as text. Plain text keeps its ampersands.
"""

from __future__ import annotations

import re

from bleach.sanitizer import Cleaner

_TABLE_CELL_ATTRS = ["width", "rowspan", "colspan", "align", "valign"]
_MEDIA_ATTRS = ["autoplay", "controls", "crossorigin", "loop", "muted", "preload", "src"]

ALLOWED_ATTRIBUTES = {
    "a": ["target", "href", "title"],
    "abbr": ["title"],
    "area": ["shape", "coords", "href", "alt"],
    "audio": _MEDIA_ATTRS,
    "bdi": ["dir"],
    "bdo": ["dir"],
    "blockquote": ["cite"],
    "col": ["align", "valign", "span", "width"],
    "colgroup": ["align", "valign", "span", "width"],
    "del": ["datetime"],
    "details": ["open"],
    "font": ["color", "size", "face"],
    "img": ["src", "alt", "title", "width", "height", "loading"],
    "ins": ["datetime"],
    "table": ["width", "border", "align", "valign"],
    "tbody": ["align", "valign"],
    "td": _TABLE_CELL_ATTRS,
    "tfoot": ["align", "valign"],
    "th": _TABLE_CELL_ATTRS,
    "thead": ["align", "valign"],
    "tr": ["rowspan", "align", "valign"],
    "video": _MEDIA_ATTRS + ["playsinline", "poster", "height", "width"],
}

ALLOWED_TAGS = frozenset(ALLOWED_ATTRIBUTES) | {
    "address", "article", "aside", "b", "big", "br", "caption", "center",
    "cite", "code", "dd", "div", "dl", "dt", "em", "figcaption", "figure",
    "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "i", "kbd",
    "li", "mark", "nav", "ol", "p", "pre", "s", "section", "small", "span",
    "strike", "strong", "sub", "summary", "sup", "tt", "u", "ul",
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]

_CLEANER = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)

# Cleaner output escapes "<" and ">" inside attribute values, so this split
# separates tags from text reliably.
_TAG_SPLIT = re.compile(r"(<[^>]*>)")


def _restore_text_ampersands(cleaned: str) -> str:
    parts = _TAG_SPLIT.split(cleaned)
    # Odd indexes are tags; only text segments get their "&" back.
    return "".join(
        part if i % 2 else part.replace("&amp;", "&")
        for i, part in enumerate(parts)
    )


def sanitize_html(value: str | None) -> str:
    if not value:
        return ""
    return _restore_text_ampersands(_CLEANER.clean(str(value)))
