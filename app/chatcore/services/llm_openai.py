"""
Purpose: Thin async client wrapper around OpenAI, used as the remote responder.
One place for auth, retries, model options, response/usage normalization.

Extensibility:
- Add other providers (AnthropicResponder, LocalResponder) without touching controller.
- Streaming is out of scope; respond() returns the whole reply.

Testing: Mock SDK calls; assert it maps usage and errors correctly.
"""

from __future__ import annotations
import asyncio
from typing import Optional

from openai import AsyncOpenAI
from openai import APIConnectionError, APITimeoutError, RateLimitError

from ..errors import ResponderError
from ..logging import get_logger
from ..models import LLMSettings

logger = get_logger(__name__)

RETRY_DELAYS = (0.5, 1.0, 2.0, 4.0)


class OpenAIResponder:
    def __init__(
        self,
        api_key: str,
        settings: LLMSettings,
        *,
        system: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.api_key = api_key
        if not self.api_key and client is None:
            raise RuntimeError("Missing OPENAI_API_KEY")
        self.settings = settings
        self.system = system
        # Without an injected client, one is opened per call: the UI drives each
        # send from its own event loop.
        self.client = client

        self.tokens_in: int = 0
        self.tokens_out: int = 0
        self.model_used: Optional[str] = None

    async def _with_retries(self, fn, *args, **kwargs):
        for delay in RETRY_DELAYS:
            try:
                return await fn(*args, **kwargs)
            except (RateLimitError, APITimeoutError, APIConnectionError) as e:
                logger.info("openai_retry", delay=delay, error=type(e).__name__)
                await asyncio.sleep(delay)
        return await fn(*args, **kwargs)

    async def respond(self, user_text: str) -> str:
        if self.client is not None:
            return await self._complete(self.client, user_text)
        async with AsyncOpenAI(api_key=self.api_key) as client:
            return await self._complete(client, user_text)

    async def _complete(self, client: AsyncOpenAI, user_text: str) -> str:
        payload = []
        if self.system:
            payload.append({"role": "system", "content": self.system})
        payload.append({"role": "user", "content": user_text})

        def call_cc():
            return client.chat.completions.create(
                model=self.settings.model,
                messages=payload,
                temperature=self.settings.temperature,
                top_p=self.settings.top_p,
                max_tokens=self.settings.max_tokens,
            )

        cc = await self._with_retries(call_cc)
        text = (cc.choices[0].message.content or "").strip() if cc.choices else ""
        usage = getattr(cc, "usage", None)
        if usage:
            self.tokens_in += int(getattr(usage, "prompt_tokens", 0) or 0)
            self.tokens_out += int(getattr(usage, "completion_tokens", 0) or 0)
        self.model_used = getattr(cc, "model", None) or self.settings.model

        if not text:
            raise ResponderError("OpenAI returned an empty completion.")
        return text
