"""
Custom Section Sanitizer

Company-authored section HTML comes from the internal layout builder, so
the allow-list is wider than for free-form user input: sections may ship
their own <style> block, form markup for the acceptance area, data-*
hooks for the host page, and an onerror attribute for image fallbacks.
Scripts, frames and every other on* handler are removed.

Sanitization runs after template resolution, so quote data values pass
through the same filter as the template itself.
"""

import re
from typing import Optional

import bleach
from bleach.css_sanitizer import CSSSanitizer

# =============================================================================
# ALLOW-LISTS
# =============================================================================

ALLOWED_TAGS = frozenset([
    # Layout
    "div", "span", "section", "header", "footer", "nav", "main", "article", "aside",
    # Text
    "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "strong", "em", "b", "i", "u", "s", "small", "sup", "sub", "mark",
    "br", "hr", "blockquote", "pre", "code",
    # Lists
    "ul", "ol", "li", "dl", "dt", "dd",
    # Tables
    "table", "caption", "colgroup", "col", "thead", "tbody", "tfoot", "tr", "td", "th",
    # Media
    "img", "figure", "figcaption", "picture", "source",
    # Interactive hooks (wired up by the host page)
    "a", "button", "details", "summary",
    "form", "fieldset", "legend", "label", "input", "select", "option", "textarea",
    # Section-scoped stylesheet
    "style",
])

ALLOWED_ATTRIBUTES = frozenset([
    "style", "class", "id", "for", "type", "placeholder", "href", "target",
    "rel", "src", "srcset", "sizes", "media", "alt", "title", "width", "height",
    "loading", "name", "value", "checked", "disabled", "selected", "required",
    "colspan", "rowspan", "role", "open",
    # Image fallback, the only event handler allowed through
    "onerror",
])

ALLOWED_PROTOCOLS = frozenset(["http", "https", "mailto", "tel"])

ALLOWED_CSS_PROPERTIES = frozenset([
    # Text
    "color", "font", "font-size", "font-weight", "font-family", "font-style",
    "text-align", "text-decoration", "text-transform", "line-height",
    "letter-spacing", "word-spacing", "white-space", "text-shadow", "word-wrap",
    # Background
    "background", "background-color", "background-image", "background-size",
    "background-position", "background-repeat",
    # Box model
    "margin", "margin-top", "margin-bottom", "margin-left", "margin-right",
    "padding", "padding-top", "padding-bottom", "padding-left", "padding-right",
    "border", "border-radius", "border-color", "border-width", "border-style",
    "border-top", "border-bottom", "border-left", "border-right", "border-collapse",
    "box-sizing", "outline",
    # Sizing
    "width", "max-width", "min-width", "height", "max-height", "min-height",
    # Flexbox / grid
    "display", "flex-direction", "justify-content", "align-items", "gap",
    "flex-wrap", "flex", "flex-grow", "flex-shrink", "flex-basis",
    "align-self", "order", "grid-template-columns", "grid-template-rows",
    "grid-gap", "grid-column", "grid-row",
    # Position
    "position", "top", "bottom", "left", "right", "z-index",
    "float", "clear", "vertical-align",
    # Visual
    "overflow", "opacity", "box-shadow", "transform", "transition", "cursor",
    "object-fit", "object-position", "list-style", "list-style-type",
])

_CSS_SANITIZER = CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)

# bleach strips disallowed tags but keeps their text, so elements whose
# content must never reach the page are removed whole first
_DROP_WITH_CONTENT = re.compile(
    r'<(script|iframe|object|embed|noscript|template)\b[^>]*>.*?(?:</\1\s*>|$)',
    re.IGNORECASE | re.DOTALL,
)


def _allow_attribute(tag: str, name: str, value: str) -> bool:
    if name in ALLOWED_ATTRIBUTES:
        return True
    return name.startswith("data-") or name.startswith("aria-")


def sanitize(html: Optional[str]) -> str:
    """Sanitize resolved section HTML with the section allow-list."""
    if not isinstance(html, str) or not html:
        return ""

    # Repeat until stable so nested tags can't reassemble a script
    cleaned = _DROP_WITH_CONTENT.sub("", html)
    while cleaned != html:
        html = cleaned
        cleaned = _DROP_WITH_CONTENT.sub("", html)
    return bleach.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=_allow_attribute,
        protocols=ALLOWED_PROTOCOLS,
        css_sanitizer=_CSS_SANITIZER,
        strip=True,
        strip_comments=True,
    )


def neutralize_css(css: Optional[str]) -> str:
    """Keep section CSS from closing its own <style> element."""
    if not isinstance(css, str):
        return ""
    return css.replace("</", "<\\/")
