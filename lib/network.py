# =============================================================================
# lib/network.py - Outbound URL Guard
# =============================================================================
# Checks that a URL is safe to fetch from the server before any request is
# made: http(s) only, and the host must not be (or resolve to) a loopback,
# private, link-local, multicast, reserved or unspecified address.
#
# A host is refused if ANY of its resolved addresses is non-public, so a
# name with one public and one internal record can't be used to reach the
# internal one.
# =============================================================================

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from urllib.parse import urlparse

from app.exceptions import UnsafeUrlError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = {"http", "https"}

_BLOCKED_HOSTNAMES = {"localhost", "localhost.localdomain", "ip6-localhost", "ip6-loopback"}


def is_public_address(address: str) -> bool:
    """True when *address* is a globally routable unicast IP."""
    try:
        ip_obj = ipaddress.ip_address(address.split("%", 1)[0])
    except ValueError:
        return False

    # ::ffff:127.0.0.1 must be judged as 127.0.0.1
    if isinstance(ip_obj, ipaddress.IPv6Address) and ip_obj.ipv4_mapped is not None:
        ip_obj = ip_obj.ipv4_mapped

    return not (
        ip_obj.is_private
        or ip_obj.is_loopback
        or ip_obj.is_link_local
        or ip_obj.is_multicast
        or ip_obj.is_reserved
        or ip_obj.is_unspecified
        or not ip_obj.is_global
    )


async def resolve_host(host: str) -> list[str]:
    """Resolve *host* to its addresses without blocking the event loop."""
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
    except socket.gaierror:
        return []
    return [sockaddr[0] for *_rest, sockaddr in infos]


async def assert_public_url(url: str) -> str:
    """
    Validate an outbound fetch target.

    Returns the URL unchanged when it is safe.

    Raises:
        UnsafeUrlError: malformed URL, bad scheme, missing host,
            unresolvable host, or a host resolving to a non-public address
    """
    try:
        parsed = urlparse(url)
        host = (parsed.hostname or "").strip().rstrip(".").lower()
        # Non-numeric or out-of-range ports only surface here
        parsed.port
    except ValueError:
        raise UnsafeUrlError(url, "malformed URL")

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise UnsafeUrlError(url, "only http and https URLs can be fetched")

    if not host:
        raise UnsafeUrlError(url, "URL has no host")

    if host in _BLOCKED_HOSTNAMES or host.endswith(".localhost"):
        raise UnsafeUrlError(url, "host is not publicly routable")

    # Literal IPs need no DNS lookup
    try:
        ipaddress.ip_address(host)
    except ValueError:
        addresses = await resolve_host(host)
    else:
        addresses = [host]

    if not addresses:
        raise UnsafeUrlError(url, "host could not be resolved")

    blocked = [address for address in addresses if not is_public_address(address)]
    if blocked:
        logger.warning(f"Blocked outbound fetch to {host} (resolves to {blocked[0]})")
        raise UnsafeUrlError(url, "host is not publicly routable")

    return url
