# Pipelines: thought bundle generation, safety-gated chat, quote of the day.

from .thought import (
    Complete,
    Failed,
    Stage,
    ThoughtMode,
    ThoughtOutcome,
    ThoughtPipeline,
    static_fallback_bundle,
)
from .chat import ChatPipeline, CRISIS_REPLY, ERROR_FALLBACK, CONTINUATION_FALLBACK
from .quote import QuoteOfTheDay, QUOTE_FALLBACK, QUOTE_UNCONFIGURED

__all__ = [
    "Complete",
    "Failed",
    "Stage",
    "ThoughtMode",
    "ThoughtOutcome",
    "ThoughtPipeline",
    "static_fallback_bundle",
    "ChatPipeline",
    "CRISIS_REPLY",
    "ERROR_FALLBACK",
    "CONTINUATION_FALLBACK",
    "QuoteOfTheDay",
    "QUOTE_FALLBACK",
    "QUOTE_UNCONFIGURED",
]
