# =============================================================================
# core/services/link_preview_service.py - Link Previews for the Editor
# =============================================================================
# Fetches a page on behalf of the admin editor and extracts the metadata a
# link block shows: title, description and preview image (Open Graph tags,
# falling back to <title> and <meta name="description">).
#
# Every hop is checked with lib.network.assert_public_url() BEFORE it is
# requested; redirects are followed by hand so a public URL can't bounce the
# server into a private network. At most FETCH_URL_MAX_BYTES of the body is
# read.
#
# The response body follows the editor's link tool contract:
#   {"success": 1, "link": url, "meta": {"title", "description", "image": {"url"}}}
# =============================================================================

from __future__ import annotations

import logging
from html.parser import HTMLParser
from typing import Any
from urllib.parse import urljoin, urlparse

import httpx

from app.exceptions import UnsafeUrlError, UpstreamError
from lib.network import assert_public_url

logger = logging.getLogger(__name__)

MAX_REDIRECTS = 5
USER_AGENT = "PortfolioLinkPreview/1.0"

_REDIRECT_CODES = {301, 302, 303, 307, 308}


class _MetaParser(HTMLParser):
    """Collects <title> and <meta> tags from the document head."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.meta: dict[str, str] = {}
        self.title_parts: list[str] = []
        self._in_title = False
        self._done = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self._done:
            return
        if tag == "title":
            self._in_title = True
        elif tag == "meta":
            values = {name.lower(): value or "" for name, value in attrs}
            key = (values.get("property") or values.get("name") or "").strip().lower()
            content = values.get("content", "").strip()
            if key and content:
                self.meta.setdefault(key, content)
        elif tag == "body":
            # Metadata lives in <head>
            self._done = True

    def handle_endtag(self, tag: str) -> None:
        if tag == "title":
            self._in_title = False

    def handle_data(self, data: str) -> None:
        if self._in_title and not self._done:
            self.title_parts.append(data)

    @property
    def title(self) -> str:
        return " ".join("".join(self.title_parts).split())


def extract_metadata(html_text: str, base_url: str) -> dict[str, Any]:
    """
    Pull title, description and image out of an HTML page.

    Relative image URLs are resolved against *base_url*. Missing values come
    back as empty strings; `image` is only present when one was found.
    """
    parser = _MetaParser()
    parser.feed(html_text)
    parser.close()

    meta = parser.meta
    title = meta.get("og:title") or meta.get("twitter:title") or parser.title
    description = (
        meta.get("og:description")
        or meta.get("twitter:description")
        or meta.get("description")
        or ""
    )
    image = meta.get("og:image") or meta.get("og:image:url") or meta.get("twitter:image")

    result: dict[str, Any] = {"title": title, "description": description}
    if image:
        image_url = urljoin(base_url, image)
        if image_url.startswith(("http://", "https://")):
            result["image"] = {"url": image_url}
    return result


class LinkPreviewService:
    """Fetch link metadata through a guarded HTTP client."""

    def __init__(self, client: httpx.AsyncClient, max_bytes: int = 1024 * 1024):
        self.client = client
        self.max_bytes = max_bytes

    async def _read_capped(self, response: httpx.Response) -> bytes:
        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) >= self.max_bytes:
                # The head is what we need; a truncated body is fine
                del body[self.max_bytes:]
                break
        return bytes(body)

    @staticmethod
    def _redirect_target(current: str, location: str) -> str:
        """Absolute URL of a redirect; a malformed Location is an upstream fault."""
        try:
            target = urljoin(current, location)
            urlparse(target).port
        except ValueError:
            raise UpstreamError("Link preview", f"invalid redirect target: {location}")
        return target

    async def fetch_page(self, url: str) -> tuple[str, str]:
        """
        GET a page, following redirects only to public hosts.

        Returns:
            Tuple of (final URL, decoded body); the body is empty for
            non-HTML responses

        Raises:
            UnsafeUrlError: The URL is malformed, or it or a redirect target
                is not public
            UpstreamError: Network failure, error status, malformed redirect
                or too many redirects
        """
        current = url
        for hop in range(MAX_REDIRECTS + 1):
            await assert_public_url(current)

            try:
                async with self.client.stream(
                    "GET",
                    current,
                    headers={"User-Agent": USER_AGENT, "Accept": "text/html,application/xhtml+xml"},
                    follow_redirects=False,
                ) as response:
                    if response.status_code in _REDIRECT_CODES and "location" in response.headers:
                        current = self._redirect_target(current, response.headers["location"])
                        continue

                    if response.status_code >= 400:
                        raise UpstreamError("Link preview", f"{current} answered {response.status_code}")

                    content_type = response.headers.get("content-type", "")
                    if content_type and "html" not in content_type.lower():
                        return current, ""

                    body = await self._read_capped(response)
                    encoding = response.encoding or "utf-8"
            except httpx.InvalidURL as e:
                # First hop is the caller's URL, later hops come from Location
                if hop == 0:
                    raise UnsafeUrlError(current, "malformed URL")
                raise UpstreamError("Link preview", f"invalid redirect target: {e}")
            except httpx.HTTPError as e:
                logger.info(f"Link preview fetch failed for {current}: {e}")
                raise UpstreamError("Link preview", str(e) or e.__class__.__name__)

            try:
                return current, body.decode(encoding, errors="replace")
            except LookupError:
                # Unknown charset label
                return current, body.decode("utf-8", errors="replace")

        raise UpstreamError("Link preview", "too many redirects")

    async def preview(self, url: str) -> dict[str, Any]:
        """
        Build the link tool response for *url*.

        Non-HTML targets (images, PDFs, ...) still succeed, with empty
        metadata.
        """
        url = url.strip()
        final_url, body = await self.fetch_page(url)
        meta = extract_metadata(body, final_url)
        logger.debug(f"Fetched link preview for {final_url}")
        return {"success": 1, "link": url, "meta": meta}
