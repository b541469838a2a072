# =============================================================================
# tests/test_blocks.py - Block Document Tests
# =============================================================================
# Tests for the case study body:
# - defensive parsing of stored/submitted content
# - normalization on the write path
# - HTML rendering and the two post-processing passes
#
# Run with: pytest tests/test_blocks.py -v
# =============================================================================

import json

import pytest

from core.models.document import Block, BlockDocument
from lib.blocks import normalize_content, parse_document, serialize_document
from lib.renderer import (
    QUOTE_STYLE,
    normalize_quotes,
    render_blocks,
    render_document_html,
    rewrite_markdown_links,
)


def _doc(*blocks):
    return BlockDocument(time=1700000000000, blocks=[Block(type=t, data=d) for t, d in blocks])


# =============================================================================
# Parsing Tests
# =============================================================================

class TestParseDocument:
    """Tests for parse_document (never raises)."""

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "undefined",
        "null",
        "{not json",
        "[1, 2, 3]",
        '"just a string"',
        b"\xff\xfe",
        42,
        {"time": 1, "version": "2.28.2"},
        {"blocks": "nope"},
    ])
    def test_garbage_becomes_empty_document(self, raw):
        document = parse_document(raw)

        assert isinstance(document, BlockDocument)
        assert document.blocks == []
        assert document.is_empty

    def test_parses_json_string(self):
        raw = json.dumps({
            "time": 1700000000000,
            "version": "2.28.2",
            "blocks": [{"id": "a1", "type": "paragraph", "data": {"text": "Hello"}}],
        })

        document = parse_document(raw)

        assert document.time == 1700000000000
        assert document.blocks[0].type == "paragraph"
        assert document.blocks[0].data == {"text": "Hello"}

    def test_malformed_blocks_are_dropped(self):
        raw = {"blocks": [
            {"type": "paragraph", "data": {"text": "kept"}},
            {"data": {"text": "no type"}},
            "not a block",
            {"type": "header", "data": {"text": "also kept", "level": 2}},
        ]}

        document = parse_document(raw)

        assert [block.type for block in document.blocks] == ["paragraph", "header"]

    def test_bad_metadata_keeps_blocks(self):
        raw = {"time": "yesterday", "blocks": [{"type": "paragraph", "data": {"text": "x"}}]}

        document = parse_document(raw)

        assert len(document.blocks) == 1

    def test_unknown_block_types_are_preserved(self):
        raw = {"blocks": [{"type": "table", "data": {"content": [["a"]]}}]}

        assert parse_document(raw).blocks[0].type == "table"


class TestNormalizeContent:
    """Tests for the write path."""

    @pytest.mark.parametrize("raw", [None, "", "undefined", "garbage"])
    def test_missing_content_stored_as_empty_document(self, raw):
        stored = normalize_content(raw)

        payload = json.loads(stored)
        assert payload["blocks"] == []
        assert "undefined" not in stored

    def test_valid_document_survives(self):
        document = _doc(("paragraph", {"text": "Hi"}))

        stored = normalize_content(serialize_document(document))

        assert parse_document(stored) == document

    def test_accepts_dict_from_request(self):
        stored = normalize_content({"blocks": [{"type": "quote", "data": {"text": "Q"}}]})

        assert json.loads(stored)["blocks"][0]["type"] == "quote"


# =============================================================================
# Rendering Tests
# =============================================================================

class TestRenderBlocks:
    """Tests for per-block HTML rendering."""

    def test_paragraph_keeps_inline_markup(self):
        html = render_blocks(_doc(("paragraph", {"text": "Some <b>bold</b> text"})))

        assert html == '<div class="ce-paragraph">Some <b>bold</b> text</div>'

    @pytest.mark.parametrize("level,tag", [(1, "h1"), (3, "h3"), (9, "h6"), (None, "h2"), ("x", "h2")])
    def test_header_levels(self, level, tag):
        html = render_blocks(_doc(("header", {"text": "Title", "level": level})))

        assert html.startswith(f"<{tag} ")
        assert html.endswith(f"</{tag}>")

    def test_flat_list(self):
        html = render_blocks(_doc(("list", {"style": "ordered", "items": ["one", "two"]})))

        assert html == (
            '<ol class="cdx-list cdx-list--ordered">'
            '<li class="cdx-list__item">one</li><li class="cdx-list__item">two</li></ol>'
        )

    def test_nested_list(self):
        items = [{"content": "parent", "items": [{"content": "child", "items": []}]}]

        html = render_blocks(_doc(("list", {"style": "unordered", "items": items})))

        assert '<li class="cdx-list__item">parent<ul class="cdx-list">' in html
        assert '<li class="cdx-list__item">child</li>' in html

    def test_code_is_escaped(self):
        html = render_blocks(_doc(("code", {"code": "<script>alert(1)</script>"})))

        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html

    def test_image(self):
        data = {
            "file": {"url": "https://cdn.example.com/cat.png", "width": 640, "height": 480},
            "caption": "A <b>cat</b>",
            "stretched": True,
        }

        html = render_blocks(_doc(("image", data)))

        assert 'src="https://cdn.example.com/cat.png"' in html
        assert 'alt="A cat"' in html
        assert 'width="640"' in html and 'height="480"' in html
        assert "cdx-image--stretched" in html
        assert "<figcaption>A <b>cat</b></figcaption>" in html

    @pytest.mark.parametrize("url", ["javascript:alert(1)", "data:image/png;base64,xx", "", None])
    def test_image_with_unsafe_url_renders_nothing(self, url):
        assert render_blocks(_doc(("image", {"file": {"url": url}}))) == ""

    def test_link_tool_block(self):
        data = {
            "link": "https://example.com/post",
            "meta": {"title": "Post <title>", "description": "About it", "image": {"url": "https://example.com/og.png"}},
        }

        html = render_blocks(_doc(("linkTool", data)))

        assert 'href="https://example.com/post"' in html
        assert 'rel="nofollow noopener noreferrer"' in html
        assert "Post &lt;title&gt;" in html
        assert 'src="https://example.com/og.png"' in html
        assert "example.com</span>" in html

    def test_unknown_types_render_nothing(self):
        html = render_blocks(_doc(("table", {"content": []}), ("paragraph", {"text": "after"})))

        assert html == '<div class="ce-paragraph">after</div>'


class TestMarkdownLinks:
    """Tests for rewrite_markdown_links."""

    def test_rewrites_every_link_in_a_paragraph(self):
        html = '<div class="ce-paragraph">See [docs](https://a.dev) and [blog](https://b.dev/x)</div>'

        result = rewrite_markdown_links(html)

        assert result == (
            '<div class="ce-paragraph">See '
            '<a href="https://a.dev" target="_blank" rel="noopener noreferrer">docs</a> and '
            '<a href="https://b.dev/x" target="_blank" rel="noopener noreferrer">blog</a></div>'
        )

    def test_idempotent(self):
        html = '<div class="ce-paragraph">[docs](https://a.dev)</div>'

        once = rewrite_markdown_links(html)

        assert rewrite_markdown_links(once) == once

    def test_only_paragraphs_are_touched(self):
        html = '<pre class="ce-code"><code>[docs](https://a.dev)</code></pre>'

        assert rewrite_markdown_links(html) == html

    def test_script_schemes_are_left_alone(self):
        html = '<div class="ce-paragraph">[click](javascript:alert(1))</div>'

        assert "<a " not in rewrite_markdown_links(html)


class TestNormalizeQuotes:
    """Tests for normalize_quotes."""

    EDITOR_QUOTE = (
        '<blockquote class="cdx-quote" contenteditable="true">'
        '<div class="cdx-quote__text" contenteditable="true" data-placeholder="Enter a quote">Stay hungry</div>'
        '<div class="cdx-quote__caption" contenteditable="true" data-placeholder="Enter a caption"></div>'
        "</blockquote>"
    )

    def test_cleans_editor_leftovers(self):
        result = normalize_quotes(self.EDITOR_QUOTE)

        assert "contenteditable" not in result
        assert "data-placeholder" not in result
        assert "cdx-quote__caption" not in result
        assert "Stay hungry" in result

    def test_applies_quote_treatment(self):
        result = normalize_quotes(self.EDITOR_QUOTE)

        assert f'style="{QUOTE_STYLE}"' in result
        assert result.count("quote-decoration") == 1

    def test_placeholder_caption_removed(self):
        html = (
            '<blockquote class="cdx-quote"><div class="cdx-quote__text">Q</div>'
            '<div class="cdx-quote__caption">Enter a caption</div></blockquote>'
        )

        assert "cdx-quote__caption" not in normalize_quotes(html)

    def test_real_caption_kept(self):
        html = (
            '<blockquote class="cdx-quote"><div class="cdx-quote__text">Q</div>'
            '<div class="cdx-quote__caption">Steve Jobs</div></blockquote>'
        )

        assert '<div class="cdx-quote__caption">Steve Jobs</div>' in normalize_quotes(html)

    def test_idempotent(self):
        once = normalize_quotes(self.EDITOR_QUOTE)

        assert normalize_quotes(once) == once

    def test_passes_are_order_independent(self):
        html = '<div class="ce-paragraph">[docs](https://a.dev)</div>\n' + self.EDITOR_QUOTE

        assert normalize_quotes(rewrite_markdown_links(html)) == rewrite_markdown_links(normalize_quotes(html))


class TestRenderDocumentHtml:
    """Tests for the full read path."""

    def test_full_pipeline(self):
        stored = serialize_document(_doc(
            ("paragraph", {"text": "Read [this](https://a.dev)"}),
            ("quote", {"text": "Less is more", "caption": "", "alignment": "left"}),
        ))

        html = render_document_html(stored)

        assert '<a href="https://a.dev" target="_blank" rel="noopener noreferrer">this</a>' in html
        assert "quote-decoration" in html
        assert "cdx-quote__caption" not in html

    @pytest.mark.parametrize("stored", ["undefined", "{broken", None])
    def test_garbled_body_renders_empty(self, stored):
        assert render_document_html(stored) == ""
