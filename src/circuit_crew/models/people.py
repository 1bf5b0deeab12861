"""Participant model."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4


@dataclass(frozen=True)
class Person:
    """A member of the training group."""

    display_name: str
    nickname: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid4()))

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "display_name": self.display_name,
            "nickname": self.nickname,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict, id: str | None = None) -> "Person":
        """Create from dictionary."""
        created_at = datetime.now()
        if data.get("created_at"):
            created_at = datetime.fromisoformat(data["created_at"])

        return cls(
            id=id or data.get("id") or str(uuid4()),
            display_name=data["display_name"],
            nickname=data.get("nickname") or None,
            created_at=created_at,
        )

    @property
    def label(self) -> str:
        """Name shown in lists, with nickname if any."""
        if self.nickname:
            return f"{self.display_name} ({self.nickname})"
        return self.display_name
