"""
Purpose: The single orchestration point for a chat session's send cycle.
Prevents UI from knowing how the store/responder work.

Key responsibilities:
- initialize(): put the welcome message into an empty transcript, once.
- send(text): validate, append the user turn, await the responder, append the
  reply (or the fixed fallback text), and keep `pending` true meanwhile.
- Expose get_history() and pending to the presentation layer.

Testing: Pure unit tests with fakes: fake Responder and an injected clock.
Verify transcript growth, fallback substitution and the pending gate.
"""

from __future__ import annotations
from typing import Optional

from .interfaces import Responder
from .logging import get_logger
from .models import Message, ResponderFailure, Role, Transcript
from .services.responder import call_responder
from .session import ChatSession

logger = get_logger(__name__)

FALLBACK_ERROR_TEXT = "Sorry, I encountered an error. Please try again."


class ConversationController:
    def __init__(
        self,
        session: ChatSession,
        responder: Responder,
        *,
        welcome_text: str,
        timeout: Optional[float] = None,
    ):
        self.session = session
        self.responder = responder
        self.welcome_text = welcome_text
        self.timeout = timeout

    @property
    def pending(self) -> bool:
        """True while a send on this session is waiting on the responder."""
        return self.session.pending

    def get_history(self) -> Transcript:
        """Get the current full history of messages."""
        return self.session.store.get_history()

    def initialize(self) -> Transcript:
        """Add the welcome message to an empty transcript. Safe to call repeatedly."""
        if not self.session.initialized:
            if len(self.session.store) == 0:
                self.session.store.append(self.welcome_text, Role.ASSISTANT)
                logger.info("session_initialized", welcome=True)
            else:
                logger.info(
                    "session_initialized",
                    welcome=False,
                    history_len=len(self.session.store),
                )
            self.session.initialized = True
        return self.get_history()

    async def send(self, raw_text: Optional[str]) -> Optional[Message]:
        """
        Run one send cycle. Returns the assistant message appended, or None when
        the input is blank or another send is still pending (nothing changes).
        Responder failures never propagate; they become FALLBACK_ERROR_TEXT.
        """
        text = (raw_text or "").strip()
        if not text:
            logger.debug("send_skipped", reason="empty")
            return None
        if self.session.pending:
            logger.debug("send_skipped", reason="pending")
            return None

        self.session.pending = True
        try:
            user_msg = self.session.store.append(text, Role.USER)
            result = await call_responder(
                self.responder, user_msg.content, timeout=self.timeout
            )

            if isinstance(result, ResponderFailure):
                logger.warning(
                    "responder_failed",
                    message_id=user_msg.id,
                    error=result.reason,
                )
                reply = FALLBACK_ERROR_TEXT
            else:
                reply = result.text

            assistant_msg = self.session.store.append(reply, Role.ASSISTANT)
            logger.info(
                "send_completed",
                user_message_id=user_msg.id,
                assistant_message_id=assistant_msg.id,
                ok=not isinstance(result, ResponderFailure),
            )
            return assistant_msg
        finally:
            self.session.pending = False
