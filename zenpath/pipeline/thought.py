# ============================================================
# Thought pipeline
# ------------------------------------------------------------
# One run turns a trigger into a ContentBundle:
#   chained:    thought -> intro -> options -> explanations (optional)
#   structured: one combined JSON request
# Stages are strictly sequential: each prompt embeds earlier output.
# Any failed request ends the run; nothing is published on failure.
# ============================================================

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union

from zenpath.broadcast import ContentBroadcaster
from zenpath.generate.types import (
    ContentBundle,
    ContentOption,
    Err,
    ErrorKind,
    GenerationRequest,
    ModelClient,
    OPTION_COUNT,
    Theme,
)
from zenpath.generate.validator import SchemaViolation, parse_option_list, parse_structured_bundle
from zenpath.log import get_logger
from zenpath.prompts import (
    INTRO_PROMPT,
    STRUCTURED_PROMPT,
    THOUGHT_PROMPT,
    build_explanations_prompt,
    build_options_prompt,
)

logger = get_logger("thought")


class ThoughtMode(str, Enum):
    CHAINED = "chained"
    STRUCTURED = "structured"


class Stage(str, Enum):
    IDLE = "idle"
    AWAITING_CORE_TEXT = "awaiting_core_text"
    AWAITING_INTRO = "awaiting_intro"
    AWAITING_OPTIONS = "awaiting_options"
    AWAITING_EXPLANATIONS = "awaiting_explanations"
    AWAITING_COMBINED = "awaiting_combined"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class Complete:
    bundle: ContentBundle


@dataclass(frozen=True)
class Failed:
    stage: Stage
    kind: ErrorKind
    reason: str


ThoughtOutcome = Union[Complete, Failed]


# Used for each option when the explanations stage is switched off.
DEFAULT_EXPLANATIONS: Dict[Theme, str] = {
    Theme.AVOIDANCE: "Avoiding the thought feels easier, but this path is blocked. Try facing it gently instead.",
    Theme.SELF_CRITICISM: "Being hard on yourself only adds weight. Try speaking to yourself like a friend.",
    Theme.OVER_CONTROL: "Trying to control everything works, but it's a long, tiring road. Try loosening your grip.",
    Theme.REFRAME: "That's a healthy choice: a kind, balanced view is the simplest way forward.",
}


def static_fallback_bundle() -> ContentBundle:
    """Hand-written content a caller can show when a run fails. Never published by the pipeline."""
    titles = [
        "Just don't think about it.",
        "I'm falling behind. I'll never catch up.",
        "I must work harder to catch up.",
        "Everyone struggles sometimes. I'm doing my best, and that's enough.",
    ]
    return ContentBundle(
        core_text="Everyone else is handling things better than me.",
        intro_text="That's a heavy thought, and a very common one. Let's look at a few ways you could respond to it.",
        options=_assemble_options(titles, [DEFAULT_EXPLANATIONS[t] for t in Theme.ordered()]),
    )


def _assemble_options(titles: List[str], explanations: List[str]) -> List[ContentOption]:
    return [
        ContentOption(title=title, theme=theme, explanation=explanation, is_optimal=theme is Theme.REFRAME)
        for title, theme, explanation in zip(titles, Theme.ordered(), explanations)
    ]


class _StageFailed(Exception):
    def __init__(self, outcome: Failed):
        super().__init__(outcome.reason)
        self.outcome = outcome


class ThoughtPipeline:
    def __init__(
        self,
        client: ModelClient,
        broadcaster: ContentBroadcaster,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 200,
        timeout: float = 20.0,
        mode: ThoughtMode = ThoughtMode.CHAINED,
        include_explanations: bool = True,
    ):
        self.client = client
        self.broadcaster = broadcaster
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.mode = ThoughtMode(mode)
        self.include_explanations = include_explanations
        # stage of the most recent run
        self.stage = Stage.IDLE

    def _request(self, prompt: str) -> GenerationRequest:
        return GenerationRequest(
            prompt=prompt,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )

    async def _step(self, stage: Stage, prompt: str) -> str:
        """Issue the single request for `stage`; raise _StageFailed on Err."""
        self.stage = stage
        logger.info("Stage %s: sending request", stage.value)
        result = await self.client.send(self._request(prompt))
        if isinstance(result, Err):
            raise _StageFailed(Failed(stage=stage, kind=result.kind, reason=result.message))
        logger.info("Stage %s: ok (%d chars)", stage.value, len(result.text))
        return result.text

    async def _run_chained(self) -> ContentBundle:
        thought = await self._step(Stage.AWAITING_CORE_TEXT, THOUGHT_PROMPT)
        intro = await self._step(Stage.AWAITING_INTRO, INTRO_PROMPT.format(thought=thought))

        options_raw = await self._step(Stage.AWAITING_OPTIONS, build_options_prompt(thought))
        titles = parse_option_list(options_raw, OPTION_COUNT)

        if self.include_explanations:
            explanations_raw = await self._step(
                Stage.AWAITING_EXPLANATIONS, build_explanations_prompt(thought, titles)
            )
            explanations = parse_option_list(explanations_raw, OPTION_COUNT)
        else:
            explanations = [DEFAULT_EXPLANATIONS[t] for t in Theme.ordered()]

        return ContentBundle(
            core_text=thought,
            intro_text=intro,
            options=_assemble_options(titles, explanations),
        )

    async def _run_structured(self) -> ContentBundle:
        raw = await self._step(Stage.AWAITING_COMBINED, STRUCTURED_PROMPT)
        try:
            return parse_structured_bundle(raw)
        except SchemaViolation as e:
            raise _StageFailed(
                Failed(stage=Stage.AWAITING_COMBINED, kind=ErrorKind.SCHEMA_VIOLATION, reason=str(e))
            ) from e

    async def run(self) -> ThoughtOutcome:
        """Run every stage in order. Publishes and returns Complete, or returns Failed."""
        logger.info("Starting %s thought run", self.mode.value)
        try:
            if self.mode is ThoughtMode.STRUCTURED:
                bundle = await self._run_structured()
            else:
                bundle = await self._run_chained()
        except _StageFailed as f:
            self.stage = Stage.FAILED
            logger.error(
                "Thought run failed at %s (%s): %s",
                f.outcome.stage.value, f.outcome.kind.value, f.outcome.reason,
            )
            return f.outcome

        self.broadcaster.publish(bundle)
        self.stage = Stage.COMPLETE
        logger.info("Thought run complete: %r", bundle.core_text)
        return Complete(bundle)
