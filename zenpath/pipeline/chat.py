# ============================================================
# Chat pipeline
# ------------------------------------------------------------
# One user message -> one ChatTurn.
#   1) local safety check; a match answers with CRISIS_REPLY, no network
#   2) otherwise a single request, raced against a wall-clock ceiling
# Every failure resolves to a fixed reply; no error reaches the caller.
# ============================================================

from __future__ import annotations
import asyncio

from zenpath.generate.types import ChatTurn, Err, GenerationRequest, ModelClient
from zenpath.log import get_logger
from zenpath.prompts import CHAT_USER_TEMPLATE, EMPATHY_SYSTEM_PROMPT
from zenpath.safety import SafetyClassifier

logger = get_logger("chat")

CRISIS_REPLY = (
    "I can hear that you're in real pain right now, and I want you to know that your feelings matter. "
    "You don't have to face this alone. Please reach out to someone you trust: a friend, family member, or counselor. "
    "If you're in crisis, please contact a crisis helpline or emergency services. You deserve real, professional "
    "support. I'm here to listen, but a trained person can help even more."
)
ERROR_FALLBACK = (
    "I'm having a moment of trouble expressing myself right now. Can you tell me more about what you're feeling?"
)
CONTINUATION_FALLBACK = "I'm here to listen. Take your time. What's on your mind?"


class ChatPipeline:
    def __init__(
        self,
        client: ModelClient,
        classifier: SafetyClassifier,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 150,
        timeout: float = 20.0,
        wait_ceiling: float = 10.0,
    ):
        if wait_ceiling <= 0:
            raise ValueError(f"wait_ceiling must be positive, got {wait_ceiling}")
        self.client = client
        self.classifier = classifier
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.wait_ceiling = wait_ceiling

    def _request(self, user_text: str) -> GenerationRequest:
        return GenerationRequest(
            prompt=CHAT_USER_TEMPLATE.format(user_text=user_text),
            system=EMPATHY_SYSTEM_PROMPT,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )

    async def converse(self, user_text: str) -> ChatTurn:
        text = (user_text or "").strip()
        if not text:
            logger.info("Blank message; nothing sent")
            return ChatTurn(user_text="", reply=CONTINUATION_FALLBACK, was_safety_triggered=False)

        matched = self.classifier.first_match(text)
        if matched is not None:
            logger.warning("High-risk phrase detected (%r); answering locally", matched)
            return ChatTurn(user_text=text, reply=CRISIS_REPLY, was_safety_triggered=True)

        reply = await self._reply(text)
        return ChatTurn(user_text=text, reply=reply, was_safety_triggered=False)

    async def _reply(self, text: str) -> str:
        task = asyncio.ensure_future(self.client.send(self._request(text)))
        done, _ = await asyncio.wait({task}, timeout=self.wait_ceiling)
        if task not in done:
            # the late result, if any, is dropped with the task
            task.cancel()
            logger.warning("No reply within %ss; using continuation fallback", self.wait_ceiling)
            return CONTINUATION_FALLBACK

        try:
            result = task.result()
        except Exception:
            logger.exception("Chat client raised")
            return ERROR_FALLBACK

        if isinstance(result, Err):
            logger.error("Chat request failed (%s): %s", result.kind.value, result.message)
            return ERROR_FALLBACK

        reply = result.text.strip()
        if not reply:
            logger.warning("Empty reply from model; using error fallback")
            return ERROR_FALLBACK
        logger.info("Chat reply received (%d chars)", len(reply))
        return reply
