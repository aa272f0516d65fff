import asyncio
import types

import httpx
import pytest
from openai import APIConnectionError

from chatcore.errors import ResponderError
from chatcore.models import LLMSettings, ResponderFailure, ResponderSuccess
from chatcore.services import llm_openai
from chatcore.services.llm_openai import OpenAIResponder
from chatcore.services.responder import call_responder

from conftest import FakeResponder, GatedResponder


# ---------------------------
# call_responder
# ---------------------------
@pytest.mark.asyncio
async def test_call_responder_success():
    result = await call_responder(FakeResponder(reply="ok"), "hi")
    assert result == ResponderSuccess("ok")


@pytest.mark.asyncio
async def test_call_responder_wraps_exceptions():
    err = KeyError("nope")
    result = await call_responder(FakeResponder(error=err), "hi")
    assert isinstance(result, ResponderFailure)
    assert result.error is err
    assert result.reason.startswith("KeyError")


@pytest.mark.asyncio
async def test_call_responder_timeout():
    result = await call_responder(GatedResponder(), "hi", timeout=0.01)
    assert isinstance(result, ResponderFailure)
    assert isinstance(result.error, asyncio.TimeoutError)


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", ["", "  \n", None, 42])
async def test_call_responder_rejects_unusable_reply(reply):
    result = await call_responder(FakeResponder(reply=reply), "hi")
    assert isinstance(result, ResponderFailure)
    assert isinstance(result.error, ResponderError)


@pytest.mark.asyncio
async def test_call_responder_does_not_absorb_cancellation():
    responder = GatedResponder()
    task = asyncio.create_task(call_responder(responder, "hi"))
    await responder.entered.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


# ---------------------------
# OpenAIResponder
# ---------------------------
class StubCompletions:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def completion(content, prompt_tokens=3, completion_tokens=5):
    return types.SimpleNamespace(
        choices=[
            types.SimpleNamespace(message=types.SimpleNamespace(content=content))
        ],
        usage=types.SimpleNamespace(
            prompt_tokens=prompt_tokens, completion_tokens=completion_tokens
        ),
        model="gpt-4o-mini-2024-07-18",
    )


def stub_client(*outcomes):
    completions = StubCompletions(outcomes)
    client = types.SimpleNamespace(
        chat=types.SimpleNamespace(completions=completions)
    )
    return client, completions


def connection_error():
    return APIConnectionError(request=httpx.Request("POST", "https://example.test"))


SETTINGS = LLMSettings(model="gpt-4o-mini", temperature=0.2, top_p=0.9, max_tokens=64)


def test_missing_api_key_raises():
    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        OpenAIResponder("", SETTINGS)


@pytest.mark.asyncio
async def test_openai_responder_builds_payload_and_tracks_usage():
    client, completions = stub_client(completion("  Hi there  "))
    responder = OpenAIResponder("sk-test", SETTINGS, system="Be brief.", client=client)

    reply = await responder.respond("Hello")

    assert reply == "Hi there"
    request = completions.requests[0]
    assert request["model"] == "gpt-4o-mini"
    assert request["max_tokens"] == 64
    assert request["messages"] == [
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "Hello"},
    ]
    assert responder.tokens_in == 3
    assert responder.tokens_out == 5
    assert responder.model_used == "gpt-4o-mini-2024-07-18"


@pytest.mark.asyncio
async def test_openai_responder_without_system_prompt():
    client, completions = stub_client(completion("ok"))
    responder = OpenAIResponder("sk-test", SETTINGS, client=client)
    await responder.respond("Hello")
    assert completions.requests[0]["messages"] == [
        {"role": "user", "content": "Hello"}
    ]


@pytest.mark.asyncio
async def test_openai_responder_retries_transient_errors(monkeypatch):
    monkeypatch.setattr(llm_openai, "RETRY_DELAYS", (0, 0))
    client, completions = stub_client(connection_error(), completion("finally"))
    responder = OpenAIResponder("sk-test", SETTINGS, client=client)

    assert await responder.respond("Hello") == "finally"
    assert len(completions.requests) == 2


@pytest.mark.asyncio
async def test_openai_responder_gives_up_after_retries(monkeypatch):
    monkeypatch.setattr(llm_openai, "RETRY_DELAYS", (0, 0))
    client, completions = stub_client(
        connection_error(), connection_error(), connection_error()
    )
    responder = OpenAIResponder("sk-test", SETTINGS, client=client)

    with pytest.raises(APIConnectionError):
        await responder.respond("Hello")
    assert len(completions.requests) == 3


@pytest.mark.asyncio
async def test_openai_responder_empty_completion_raises():
    client, _ = stub_client(completion(None))
    responder = OpenAIResponder("sk-test", SETTINGS, client=client)
    with pytest.raises(ResponderError):
        await responder.respond("Hello")
