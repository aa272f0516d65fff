"""
Purpose: The one place a responder is awaited.
Turns whatever the responder does (reply, exception, timeout, blank text) into a
ResponderResult so the controller branches on a value instead of catching.
"""

from __future__ import annotations
import asyncio
from typing import Optional

from ..errors import ResponderError
from ..interfaces import Responder
from ..models import ResponderFailure, ResponderResult, ResponderSuccess


async def call_responder(
    responder: Responder,
    user_text: str,
    *,
    timeout: Optional[float] = None,
) -> ResponderResult:
    """
    Await responder.respond(user_text). With timeout=None the wait is unbounded.
    Cancellation of the awaiting task is not absorbed.
    """
    try:
        if timeout is None:
            reply = await responder.respond(user_text)
        else:
            reply = await asyncio.wait_for(responder.respond(user_text), timeout)
    except Exception as e:
        return ResponderFailure(e)

    if not isinstance(reply, str) or not reply.strip():
        return ResponderFailure(ResponderError("Responder returned an empty reply."))
    return ResponderSuccess(reply)
