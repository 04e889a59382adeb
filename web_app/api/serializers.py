"""Conversion of domain objects into response payloads."""

from typing import Iterable, Optional

from shortlink.database.models import Link, Access
from shortlink.common.links import short_link_url

from .schemas import ShortenResponse, AccessEntry, AccessReportResponse


MISSING_VALUE = "none"


def serialize_link(link: Link, base_url: str, path_prefix: str = "") -> ShortenResponse:
    """Link as returned by the create endpoint."""
    return ShortenResponse(
        long_url=link.url,
        short_link=short_link_url(link.code, base_url, path_prefix),
    )


def _or_missing(value: Optional[str]) -> str:
    return value if value and value.strip() else MISSING_VALUE


def serialize_access(access: Access) -> AccessEntry:
    """Access as shown in a report; absent values render as 'none'."""
    return AccessEntry(
        time=access.created_at,
        referrer=_or_missing(access.referrer_url),
        user_agent=_or_missing(access.user_agent),
    )


def serialize_accesses(accesses: Iterable[Access]) -> AccessReportResponse:
    """Report payload, keeping the order given."""
    return AccessReportResponse(response=[serialize_access(a) for a in accesses])
