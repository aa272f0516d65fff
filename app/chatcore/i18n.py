"""Localized chat strings (welcome, input placeholder, thinking label)."""

from __future__ import annotations
from typing import Mapping, Optional

from .models import ChatStrings

CHAT_STRINGS: dict[str, ChatStrings] = {
    "en": ChatStrings(
        welcome="Hello! I'm your AI assistant. How can I help you today?",
        placeholder="Type your message...",
        thinking="Thinking...",
    ),
    "es": ChatStrings(
        welcome="¡Hola! Soy tu asistente de IA. ¿En qué puedo ayudarte hoy?",
        placeholder="Escribe tu mensaje...",
        thinking="Pensando...",
    ),
}


class StaticStringProvider:
    def __init__(
        self,
        tables: Optional[Mapping[str, ChatStrings]] = None,
        *,
        fallback: str = "en",
    ):
        self.tables = dict(tables or CHAT_STRINGS)
        if fallback not in self.tables:
            raise ValueError(f"Fallback language {fallback!r} has no strings.")
        self.fallback = fallback

    def languages(self) -> list[str]:
        return sorted(self.tables)

    def strings(self, language: Optional[str] = None) -> ChatStrings:
        """Strings for `language` ("es", "es-MX", ...), else the fallback table."""
        code = (language or "").strip().lower()
        if code in self.tables:
            return self.tables[code]
        base = code.split("-", 1)[0].split("_", 1)[0]
        return self.tables.get(base, self.tables[self.fallback])
