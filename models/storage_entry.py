"""
StorageEntry model - one serialized collection stored under a versioned key.
"""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageEntry(SQLModel, table=True):
    """Key-value row holding a JSON blob, e.g. key "wealthfolio_assets_v3"."""
    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=_utcnow)  # UTC, timezone-aware
