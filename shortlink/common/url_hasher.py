"""URL normalization and fingerprinting for deduplication."""

import hashlib
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode


def normalize_url(url: str) -> str:
    """Canonicalize a URL so equivalent spellings compare equal.

    Lower-cases the scheme, host and path and sorts query parameters by key.
    Userinfo, port and fragment are left untouched, as is a trailing slash
    and an empty ``?`` or ``#``.

    Args:
        url: A URL that has already passed syntax validation

    Returns:
        Normalized URL string

    Raises:
        ValueError: If the URL cannot be parsed
    """
    parts = urlsplit(url)

    scheme = parts.scheme.lower()
    netloc = _lower_host(parts.netloc)
    path = parts.path.lower()
    query = _sort_query(parts.query) if parts.query else parts.query

    normalized = urlunsplit((scheme, netloc, path, "", ""))
    # urlunsplit drops empty components; "x?" and "x" are different URLs
    before_fragment, has_fragment, _ = url.partition("#")
    if "?" in before_fragment:
        normalized += f"?{query}"
    if has_fragment:
        normalized += f"#{parts.fragment}"
    return normalized


def hash_url(url: str) -> str:
    """Fingerprint of the normalized URL (32 hex characters).

    Args:
        url: The URL to fingerprint

    Returns:
        Hex MD5 digest of ``normalize_url(url)``
    """
    return hashlib.md5(normalize_url(url).encode("utf-8")).hexdigest()


def _lower_host(netloc: str) -> str:
    # Userinfo is case-sensitive; host and port are not.
    userinfo, sep, hostport = netloc.rpartition("@")
    return f"{userinfo}{sep}{hostport.lower()}"


def _sort_query(query: str) -> str:
    pairs = parse_qsl(query, keep_blank_values=True)
    # sorted() is stable, so repeated keys keep their value order
    return urlencode(sorted(pairs, key=lambda pair: pair[0]))
