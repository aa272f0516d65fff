"""
Abstractions for pluggable services. Inversion of control: core depends
on interfaces, not concrete services. Enables fakes/mocks and future swaps.
Protocols define what services or components can do,
without saying how they do it.

Common protocols:
- Responder.respond(user_text) -> str (async; may raise)
- MessageStore.get_history() -> Transcript & append(content, role) -> Message
- StringProvider.strings(language) -> ChatStrings

Testing: Use simple fake implementations to test the controller without network calls.
"""

from __future__ import annotations
from typing import Optional, Protocol, Union
from .models import ChatStrings, Message, Role, Transcript


class Responder(Protocol):
    async def respond(self, user_text: str) -> str: ...


class MessageStore(Protocol):
    def get_history(self) -> Transcript: ...

    def append(self, content: str, role: Union[Role, str]) -> Message: ...

    def __len__(self) -> int: ...


class StringProvider(Protocol):
    def strings(self, language: Optional[str] = None) -> ChatStrings: ...
