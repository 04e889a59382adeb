"""Data models for shortlink."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Any, Mapping


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        moment = value
    else:
        moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class Link:
    """A short code mapped to its original URL and dedup fingerprint."""

    id: int
    url: str
    url_hash: str
    code: str
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "url": self.url,
            "url_hash": self.url_hash,
            "code": self.code,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Link":
        """Create from dictionary or database row."""
        return cls(
            id=data["id"],
            url=data["url"],
            url_hash=data["url_hash"],
            code=data["code"],
            created_at=_as_datetime(data["created_at"]),
        )


@dataclass(frozen=True)
class Access:
    """One recorded redirect through a Link."""

    id: int
    link_id: int
    created_at: datetime
    referrer_url: Optional[str] = None
    user_agent: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "link_id": self.link_id,
            "referrer_url": self.referrer_url,
            "user_agent": self.user_agent,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Access":
        """Create from dictionary or database row."""
        return cls(
            id=data["id"],
            link_id=data["link_id"],
            referrer_url=data.get("referrer_url"),
            user_agent=data.get("user_agent"),
            created_at=_as_datetime(data["created_at"]),
        )
