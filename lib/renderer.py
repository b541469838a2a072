# =============================================================================
# lib/renderer.py - Read-only HTML Rendering for Block Documents
# =============================================================================
# Renders a BlockDocument to HTML using the editor's own class names
# (ce-paragraph, cdx-quote, ...) so the site stylesheet applies unchanged,
# then runs two independent post-processing passes:
#
# 1. rewrite_markdown_links(): "[text](url)" inside paragraphs becomes an
#    anchor that opens in a new tab with noopener/noreferrer.
# 2. normalize_quotes(): drops empty or placeholder captions, strips
#    editing attributes, applies the quote treatment (left accent border
#    and a decorative leading quotation mark).
#
# Both passes only touch their own elements, so their order doesn't matter,
# and both are idempotent.
#
# Text fields of paragraphs, headers, lists and quotes are inline HTML
# written by the editor (bold, italic, links) and are emitted as-is.
# Everything else (code, URLs, captions of media) is escaped.
# =============================================================================

from __future__ import annotations

import html
import logging
import re
from typing import Any
from urllib.parse import urlparse

from markupsafe import Markup

from core.models.document import BlockDocument, BlockType
from lib.blocks import parse_document

logger = logging.getLogger(__name__)

CAPTION_PLACEHOLDER = "Enter a caption"

QUOTE_STYLE = (
    "border-left: 4px solid #dc2626; padding: 0.1rem 0 0.1rem 2rem; "
    "margin: 2rem 0; font-style: italic; position: relative;"
)

QUOTE_DECORATION = Markup(
    '<span class="quote-decoration" aria-hidden="true" '
    'style="position: absolute; top: -0.25rem; left: -0.25rem; font-size: 3rem; '
    'color: #dc2626; opacity: 0.3; font-family: Georgia, serif; line-height: 1; '
    'pointer-events: none;">&ldquo;</span>'
)

_MD_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
_PARAGRAPH_RE = re.compile(r'(<div\b[^>]*\bclass="ce-paragraph[^"]*"[^>]*>)(.*?)(</div>)', re.S)
_QUOTE_RE = re.compile(r'<blockquote\b([^>]*\bclass="[^"]*\bcdx-quote\b[^"]*"[^>]*)>(.*?)</blockquote>', re.S)
_CAPTION_RE = re.compile(
    r'<(div|cite|figcaption)\b[^>]*\bclass="[^"]*\bcdx-quote__caption\b[^"]*"[^>]*>(.*?)</\1>', re.S
)
_EDITING_ATTR_RE = re.compile(r'\s(?:contenteditable|data-placeholder)(?:="[^"]*")?(?=[\s>/]|$)')
_STYLE_ATTR_RE = re.compile(r'\sstyle="[^"]*"')
_TAG_RE = re.compile(r"<[^>]+>")

_SAFE_SCHEMES = {"http", "https", "mailto", ""}


def _is_http_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_safe_href(value: str) -> bool:
    """Reject script-capable schemes such as javascript: and data:."""
    return urlparse(html.unescape(value).strip()).scheme.lower() in _SAFE_SCHEMES


def _text(data: dict[str, Any], key: str) -> Markup:
    value = data.get(key)
    return Markup(value) if isinstance(value, str) else Markup("")


def _dimension(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


# =============================================================================
# Block Renderers
# =============================================================================

def _render_paragraph(data: dict[str, Any]) -> Markup:
    return Markup('<div class="ce-paragraph">{}</div>').format(_text(data, "text"))


def _render_header(data: dict[str, Any]) -> Markup:
    level = _dimension(data.get("level")) or 2
    level = min(max(level, 1), 6)
    return Markup('<h{0} class="ce-header">{1}</h{0}>').format(level, _text(data, "text"))


def _render_list_items(items: list[Any], tag: str) -> Markup:
    rendered = []
    for item in items:
        # Flat lists store strings; nested lists store {content, items}
        if isinstance(item, dict):
            content = Markup(item.get("content") or "")
            children = item.get("items") or []
            nested = _render_list_items(children, tag) if children else Markup("")
            if children:
                nested = Markup('<{0} class="cdx-list">{1}</{0}>').format(tag, nested)
            rendered.append(Markup('<li class="cdx-list__item">{}{}</li>').format(content, nested))
        elif isinstance(item, str):
            rendered.append(Markup('<li class="cdx-list__item">{}</li>').format(Markup(item)))
    return Markup("").join(rendered)


def _render_list(data: dict[str, Any]) -> Markup:
    ordered = data.get("style") == "ordered"
    tag = "ol" if ordered else "ul"
    style = "ordered" if ordered else "unordered"
    items = data.get("items") if isinstance(data.get("items"), list) else []
    return Markup('<{0} class="cdx-list cdx-list--{1}">{2}</{0}>').format(
        tag, style, _render_list_items(items, tag)
    )


def _render_quote(data: dict[str, Any]) -> Markup:
    alignment = "center" if data.get("alignment") == "center" else "left"
    return Markup(
        '<blockquote class="cdx-quote cdx-quote--{0}">'
        '<div class="cdx-quote__text">{1}</div>'
        '<div class="cdx-quote__caption">{2}</div>'
        "</blockquote>"
    ).format(alignment, _text(data, "text"), _text(data, "caption"))


def _render_code(data: dict[str, Any]) -> Markup:
    code = data.get("code") if isinstance(data.get("code"), str) else ""
    return Markup('<pre class="ce-code"><code>{}</code></pre>').format(code)


def _render_delimiter(data: dict[str, Any]) -> Markup:
    return Markup('<div class="ce-delimiter"></div>')


def _render_image(data: dict[str, Any]) -> Markup:
    file_info = data.get("file") if isinstance(data.get("file"), dict) else {}
    url = file_info.get("url") or data.get("url")
    if not _is_http_url(url):
        return Markup("")

    caption = data.get("caption") if isinstance(data.get("caption"), str) else ""
    alt = _TAG_RE.sub("", caption)
    attrs = Markup(' src="{}" alt="{}" loading="lazy"').format(url, html.unescape(alt))
    width = _dimension(file_info.get("width") or data.get("width"))
    height = _dimension(file_info.get("height") or data.get("height"))
    if width:
        attrs += Markup(' width="{}"').format(width)
    if height:
        attrs += Markup(' height="{}"').format(height)

    classes = ["cdx-image"]
    for flag, css in (("withBorder", "cdx-image--bordered"), ("stretched", "cdx-image--stretched"),
                      ("withBackground", "cdx-image--background")):
        if data.get(flag):
            classes.append(css)

    figcaption = Markup("<figcaption>{}</figcaption>").format(Markup(caption)) if caption.strip() else Markup("")
    return Markup('<figure class="{}"><img{}>{}</figure>').format(" ".join(classes), attrs, figcaption)


def _render_link(data: dict[str, Any]) -> Markup:
    link = data.get("link")
    if not _is_http_url(link):
        return Markup("")

    meta = data.get("meta") if isinstance(data.get("meta"), dict) else {}
    title = meta.get("title") if isinstance(meta.get("title"), str) else ""
    description = meta.get("description") if isinstance(meta.get("description"), str) else ""
    image = meta.get("image") if isinstance(meta.get("image"), dict) else {}

    parts = []
    if _is_http_url(image.get("url")):
        parts.append(Markup('<img class="link-tool__image" src="{}" alt="">').format(image["url"]))
    parts.append(Markup('<div class="link-tool__title">{}</div>').format(title or link))
    if description:
        parts.append(Markup('<p class="link-tool__description">{}</p>').format(description))
    parts.append(Markup('<span class="link-tool__anchor">{}</span>').format(urlparse(link).netloc))

    return Markup(
        '<a class="link-tool" href="{}" target="_blank" rel="nofollow noopener noreferrer">{}</a>'
    ).format(link, Markup("").join(parts))


_RENDERERS = {
    BlockType.PARAGRAPH.value: _render_paragraph,
    BlockType.HEADER.value: _render_header,
    BlockType.LIST.value: _render_list,
    BlockType.QUOTE.value: _render_quote,
    BlockType.CODE.value: _render_code,
    BlockType.DELIMITER.value: _render_delimiter,
    BlockType.IMAGE.value: _render_image,
    BlockType.LINK.value: _render_link,
    BlockType.LINK_TOOL.value: _render_link,
}


def render_blocks(document: BlockDocument) -> str:
    """Render each block with its type-specific renderer; unknown types render nothing."""
    rendered = []
    for block in document.blocks:
        renderer = _RENDERERS.get(block.type)
        if renderer is None:
            logger.debug(f"No renderer for block type {block.type!r}")
            continue
        rendered.append(str(renderer(block.data)))
    return "\n".join(chunk for chunk in rendered if chunk)


# =============================================================================
# Post-processing
# =============================================================================

def _link_replacement(match: re.Match) -> str:
    text, url = match.group(1), match.group(2)
    if not _is_safe_href(url):
        return match.group(0)
    href = url.replace('"', "&quot;")
    return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{text}</a>'


def rewrite_markdown_links(rendered: str) -> str:
    """Turn every [text](url) inside a paragraph into an anchor."""

    def _paragraph(match: re.Match) -> str:
        open_tag, body, close_tag = match.groups()
        return open_tag + _MD_LINK_RE.sub(_link_replacement, body) + close_tag

    return _PARAGRAPH_RE.sub(_paragraph, rendered)


def _is_placeholder_caption(body: str) -> bool:
    text = html.unescape(_TAG_RE.sub("", body)).strip()
    return not text or text == CAPTION_PLACEHOLDER


def normalize_quotes(rendered: str) -> str:
    """Clean editor leftovers out of quote blocks and apply the quote treatment."""

    def _caption(match: re.Match) -> str:
        return "" if _is_placeholder_caption(match.group(2)) else match.group(0)

    def _quote(match: re.Match) -> str:
        attrs, body = match.groups()
        attrs = _EDITING_ATTR_RE.sub("", attrs)
        attrs = _STYLE_ATTR_RE.sub("", attrs)
        body = _EDITING_ATTR_RE.sub("", body)
        body = _CAPTION_RE.sub(_caption, body)
        if "quote-decoration" not in body:
            body = str(QUOTE_DECORATION) + body
        return f'<blockquote{attrs} style="{QUOTE_STYLE}">{body}</blockquote>'

    return _QUOTE_RE.sub(_quote, rendered)


def render_document_html(content: Any) -> str:
    """
    Full read path: parse defensively, render, post-process.

    Never raises for bad stored content; a garbled body renders as "".
    """
    document = parse_document(content)
    return normalize_quotes(rewrite_markdown_links(render_blocks(document)))
