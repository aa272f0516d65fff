"""Exceptions raised by the chat core.

Responder failures never reach the caller of ConversationController.send;
these types exist for the store's own validation and for concrete
responders to signal an unusable reply.
"""


class ChatCoreError(Exception):
    """Base class for chat core errors."""


class EmptyMessageError(ChatCoreError, ValueError):
    """Message content is empty after trimming."""


class ResponderError(ChatCoreError):
    """The remote responder returned something that cannot be shown."""
