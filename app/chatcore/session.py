"""
One chat session: the transcript store plus the session-local flags that must
outlive a single render. Created once per browser session (or per test),
handed to the controller by reference, and simply dropped when done.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from .interfaces import MessageStore
from .models import Message
from .persistence.session_store import InMemoryMessageStore


@dataclass
class ChatSession:
    store: MessageStore = field(default_factory=InMemoryMessageStore)
    # Set by ConversationController.initialize; independent of transcript length.
    initialized: bool = False
    # True while any controller on this session awaits the responder.
    pending: bool = False

    @classmethod
    def create(
        cls, history: Optional[Iterable[Union[Message, dict]]] = None
    ) -> "ChatSession":
        """New session, optionally seeded with a transcript from prior state."""
        return cls(store=InMemoryMessageStore(history))
