"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- Role (closed user/assistant tag).
- Message (id, role, content, timestamp), immutable once created.
- ChatStrings (welcome, placeholder, thinking) from the string provider.
- LLMSettings (model, temperature, top_p, max_tokens).
- ResponderSuccess / ResponderFailure, the outcome of one responder call.

Testing: Trivial; mostly types. to_dict/from_dict are covered by store tests.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Union


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def as_utc_aware(ts: datetime) -> datetime:
    """Naive timestamps from prior state are taken to be UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


@dataclass(frozen=True)
class Message:
    id: str
    role: Role
    content: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        """Rebuild a message carried over from prior session state."""
        ts = data["timestamp"]
        if not isinstance(ts, datetime):
            raw = str(ts).strip()
            if raw.endswith(("Z", "z")):
                raw = raw[:-1] + "+00:00"
            ts = datetime.fromisoformat(raw)
        return cls(
            id=str(data["id"]),
            role=Role(data["role"]),
            content=str(data["content"]),
            timestamp=as_utc_aware(ts),
        )


@dataclass(frozen=True)
class ChatStrings:
    welcome: str
    placeholder: str
    thinking: str


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.7
    top_p: float = 1.0
    max_tokens: int = 512


@dataclass(frozen=True)
class ResponderSuccess:
    text: str


@dataclass(frozen=True)
class ResponderFailure:
    error: BaseException

    @property
    def reason(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


ResponderResult = Union[ResponderSuccess, ResponderFailure]
Transcript = tuple[Message, ...]
