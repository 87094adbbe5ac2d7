# ===============================================
# tests/test_chat_pipeline.py
# Safety short-circuit, bounded wait and fallback replies.
# ===============================================

import asyncio
import time

import pytest

from zenpath.generate.types import Err, ErrorKind
from zenpath.pipeline.chat import (
    CONTINUATION_FALLBACK,
    CRISIS_REPLY,
    ERROR_FALLBACK,
    ChatPipeline,
)
from zenpath.prompts import EMPATHY_SYSTEM_PROMPT
from zenpath.safety import SafetyClassifier


def converse(pipeline, text):
    return asyncio.run(pipeline.converse(text))


@pytest.mark.parametrize("text", ["I am hopeless", "sometimes I WANT TO DIE honestly", "i just can't go on"])
def test_high_risk_input_never_calls_network(scripted, text):
    client = scripted([])
    turn = converse(ChatPipeline(client, SafetyClassifier()), text)
    assert turn.was_safety_triggered is True
    assert turn.reply == CRISIS_REPLY
    assert client.calls == 0


def test_reply_is_trimmed_model_text(scripted):
    client = scripted(["  You're not alone in feeling this way.  \n"])
    turn = converse(ChatPipeline(client, SafetyClassifier()), "  I'm stressed about work  ")
    assert turn.reply == "You're not alone in feeling this way."
    assert turn.was_safety_triggered is False
    assert turn.user_text == "I'm stressed about work"


def test_request_uses_empathetic_framing(scripted):
    client = scripted(["ok"])
    converse(ChatPipeline(client, SafetyClassifier(), max_tokens=150), "rough day")
    req = client.requests[0]
    assert req.system == EMPATHY_SYSTEM_PROMPT
    assert "rough day" in req.prompt
    assert req.max_tokens == 150


@pytest.mark.parametrize(
    "kind", [ErrorKind.TRANSPORT_FAILURE, ErrorKind.SERVER_ERROR, ErrorKind.MALFORMED_ENVELOPE, ErrorKind.CREDENTIAL_MISSING]
)
def test_any_failure_becomes_error_fallback(scripted, kind):
    client = scripted([Err(kind, "raw transport detail")])
    turn = converse(ChatPipeline(client, SafetyClassifier()), "hello")
    assert turn.reply == ERROR_FALLBACK
    assert "raw transport detail" not in turn.reply


def test_client_exception_becomes_error_fallback(scripted):
    client = scripted([RuntimeError("boom")])
    turn = converse(ChatPipeline(client, SafetyClassifier()), "hello")
    assert turn.reply == ERROR_FALLBACK


def test_empty_model_reply_falls_back(scripted):
    client = scripted(["   "])
    assert converse(ChatPipeline(client, SafetyClassifier()), "hello").reply == ERROR_FALLBACK


def test_unresolved_call_returns_continuation_within_ceiling(hanging):
    pipeline = ChatPipeline(hanging, SafetyClassifier(), wait_ceiling=0.2)
    started = time.monotonic()
    turn = converse(pipeline, "what should I do about tomorrow?")
    elapsed = time.monotonic() - started

    assert turn.reply == CONTINUATION_FALLBACK
    assert turn.was_safety_triggered is False
    assert hanging.calls == 1
    assert elapsed < 0.2 + 1.0


def test_losing_call_is_cancelled(hanging):
    async def scenario():
        pipeline = ChatPipeline(hanging, SafetyClassifier(), wait_ceiling=0.05)
        turn = await pipeline.converse("hi")
        await asyncio.sleep(0.01)  # let the cancellation land
        return turn

    turn = asyncio.run(scenario())
    assert turn.reply == CONTINUATION_FALLBACK
    assert hanging.cancelled is True


def test_blank_input_gets_continuation_without_network(scripted):
    client = scripted([])
    turn = converse(ChatPipeline(client, SafetyClassifier()), "   ")
    assert turn.reply == CONTINUATION_FALLBACK
    assert turn.was_safety_triggered is False
    assert client.calls == 0


def test_wait_ceiling_must_be_positive(scripted):
    with pytest.raises(ValueError):
        ChatPipeline(scripted([]), SafetyClassifier(), wait_ceiling=0)
