"""Transcript entries held in the UI session."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Sender(str, Enum):
    USER = "user"
    AI = "ai"
    ERROR = "error"


def now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ChatMessage:
    text: str
    sender: Sender
    timestamp: str = field(default_factory=now_iso)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def local_time(self) -> str:
        """Time of day in the viewer's local timezone, or the raw value if unparseable."""
        try:
            parsed = datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        except ValueError:
            return self.timestamp
        return parsed.astimezone().strftime("%H:%M:%S")
