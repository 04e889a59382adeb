"""Short link URLs and the request details recorded with each access."""

from typing import Mapping, NamedTuple, Optional


class AccessContext(NamedTuple):
    """Request details stored with an access; None when the header is absent."""

    referrer_url: Optional[str]
    user_agent: Optional[str]


def _lookup(headers: Mapping[str, str], name: str) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


def _first_hop(value: Optional[str]) -> Optional[str]:
    # Proxy chains append entries: "https, http"
    if not value:
        return None
    return value.split(",")[0].strip() or None


def access_context(headers: Mapping[str, str]) -> AccessContext:
    """Read the Referer and User-Agent headers exactly as sent.

    Args:
        headers: Request headers

    Returns:
        AccessContext with None for missing headers
    """
    return AccessContext(
        referrer_url=_lookup(headers, "referer"),
        user_agent=_lookup(headers, "user-agent"),
    )


def public_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Work out the scheme and host clients use to reach this service.

    A reverse proxy's X-Forwarded-Proto/X-Forwarded-Host win over the request's
    own scheme and Host header; the configured base URL is the last resort.

    Args:
        headers: Request headers
        fallback_base_url: Configured base URL
        request_scheme: Scheme the request arrived with
        request_host: Host header, including a non-default port

    Returns:
        Base URL without a trailing slash (e.g., https://sho.rt)
    """
    proto = _first_hop(_lookup(headers, "x-forwarded-proto"))
    host = _first_hop(_lookup(headers, "x-forwarded-host"))

    if proto and host:
        return f"{proto}://{host}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def short_link_url(code: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional path prefix and code into the public short link."""
    segments = [base_url.rstrip("/")]
    segments.extend(part for part in path_prefix.split("/") if part)
    segments.append(code)
    return "/".join(segments)
