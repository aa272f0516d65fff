"""Shared fakes for the chat core tests. No network, no Streamlit."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from chatcore.controller import ConversationController
from chatcore.session import ChatSession

WELCOME = "Hello! How can I help you today?"


class FakeResponder:
    """Replies with a fixed text, or raises `error` when set."""

    def __init__(self, reply="Hi there", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def respond(self, user_text):
        self.calls.append(user_text)
        if self.error is not None:
            raise self.error
        return self.reply


class GatedResponder:
    """Blocks inside respond() until release() is called."""

    def __init__(self, reply="done"):
        self.reply = reply
        self.calls = []
        self.entered = asyncio.Event()
        self._gate = asyncio.Event()

    def release(self):
        self._gate.set()

    async def respond(self, user_text):
        self.calls.append(user_text)
        self.entered.set()
        await self._gate.wait()
        return self.reply


class StepClock:
    """Deterministic clock; each call advances by `step` (may be negative)."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def session():
    return ChatSession.create()


@pytest.fixture
def responder():
    return FakeResponder()


@pytest.fixture
def controller(session, responder):
    return ConversationController(session, responder, welcome_text=WELCOME)
