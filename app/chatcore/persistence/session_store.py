"""
Purpose: Transcript storage for one chat session (in-memory, lives as long as
the session object does).
Why: Single owner of the ordered message list; the only place that mutates it.

What is inside:
InMemoryMessageStore with get_history/append, seeded from prior session
state when the UI already holds a transcript.

Testing:
In-memory: simple state tests with an injected clock.
"""

from __future__ import annotations
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Union

from ..errors import EmptyMessageError
from ..logging import get_logger
from ..models import Message, Role, Transcript, as_utc_aware

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _loaded(m: Union[Message, dict]) -> Message:
    if not isinstance(m, Message):
        return Message.from_dict(m)
    if m.timestamp.tzinfo is None:
        return replace(m, timestamp=as_utc_aware(m.timestamp))
    return m


class InMemoryMessageStore:
    def __init__(
        self,
        messages: Optional[Iterable[Union[Message, dict]]] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._clock = clock
        self._messages: list[Message] = [_loaded(m) for m in (messages or [])]

    def get_history(self) -> Transcript:
        """Snapshot of the transcript; re-read after each append."""
        return tuple(self._messages)

    def append(self, content: str, role: Union[Role, str]) -> Message:
        """Create a message with a fresh id and timestamp and append it."""
        if not (content or "").strip():
            raise EmptyMessageError("Message content must not be empty.")
        role = Role(role)

        now = as_utc_aware(self._clock())
        if self._messages and now < self._messages[-1].timestamp:
            now = self._messages[-1].timestamp

        msg = Message(
            id=uuid.uuid4().hex,
            role=role,
            content=content,
            timestamp=now,
        )
        self._messages.append(msg)
        logger.debug(
            "message_appended",
            message_id=msg.id,
            role=role.value,
            chars=len(content),
            history_len=len(self._messages),
        )
        return msg

    def __len__(self) -> int:
        return len(self._messages)
