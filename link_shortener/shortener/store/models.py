"""Data models for the link shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone


STATUS_ACTIVE = "active"
STATUS_EXPIRED = "expired"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Link:
    """Represents a short link record in the store."""

    id: int
    code: str
    target: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """A link expires strictly after its expires_at instant."""
        return now > self.expires_at

    def status(self, now: datetime) -> str:
        """Logical status at the given instant."""
        return STATUS_EXPIRED if self.is_expired(now) else STATUS_ACTIVE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "code": self.code,
            "target": self.target,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        """Create from dictionary."""
        return cls(
            id=int(data["id"]),
            code=data["code"],
            target=data["target"],
            created_at=_as_datetime(data["created_at"]),
            expires_at=_as_datetime(data["expires_at"]),
        )

    @classmethod
    def from_row(cls, row) -> "Link":
        """Create from a database row (asyncpg Record or mapping)."""
        return cls(
            id=row["id"],
            code=row["code"],
            target=row["target"],
            created_at=_as_utc(row["created_at"]),
            expires_at=_as_utc(row["expires_at"]),
        )


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    return _as_utc(datetime.fromisoformat(value))


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
