# Turns raw model text into validated shapes.
#
# Two policies live here on purpose:
#   parse_option_list       - line-based; always repairs (pads/truncates), never fails
#   parse_structured_bundle - JSON schema; any deviation raises SchemaViolation

from __future__ import annotations
import json
import re
from typing import List

from pydantic import BaseModel, ValidationError

from .types import ContentBundle, ContentOption, OPTION_COUNT, Theme

BULLET_MARKER = "- "
DEFAULT_FILLER = "Take a deep breath and remind yourself this thought is just a thought."

_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n(.*)\n\s*```$", re.DOTALL)


class SchemaViolation(ValueError):
    """Structured model output did not match the bundle schema."""


def parse_option_list(raw: str, expected_count: int = OPTION_COUNT, filler: str = DEFAULT_FILLER) -> List[str]:
    """
    Split raw text into exactly `expected_count` lines.
    - one candidate per line, whitespace trimmed
    - a leading "- " bullet is stripped
    - empty lines are dropped
    - short lists are padded with `filler` at the end, long lists keep the first N
    """
    if expected_count < 1:
        raise ValueError(f"expected_count must be >= 1, got {expected_count}")
    items: List[str] = []
    for line in (raw or "").splitlines():
        clean = line.strip()
        if clean == BULLET_MARKER.strip():
            continue
        if clean.startswith(BULLET_MARKER):
            clean = clean[len(BULLET_MARKER):].strip()
        if clean:
            items.append(clean)
    while len(items) < expected_count:
        items.append(filler)
    return items[:expected_count]


# --- structured path ---

class StructuredOption(BaseModel):
    title: str
    theme: Theme
    dialogue: str
    optimal: bool


class StructuredBundle(BaseModel):
    thought: str
    introDialogue: str
    options: List[StructuredOption]


def _strip_fence(raw: str) -> str:
    text = (raw or "").strip()
    m = _FENCE.match(text)
    return m.group(1).strip() if m else text


def parse_structured_bundle(raw: str) -> ContentBundle:
    """Decode {thought, introDialogue, options[4]} into a ContentBundle or raise SchemaViolation."""
    text = _strip_fence(raw)
    try:
        payload = StructuredBundle.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        raise SchemaViolation(f"content is not valid JSON: {e.msg}") from e
    except ValidationError as e:
        raise SchemaViolation(f"content does not match schema: {e.error_count()} error(s)") from e

    if len(payload.options) != OPTION_COUNT:
        raise SchemaViolation(f"expected {OPTION_COUNT} options, got {len(payload.options)}")

    themes = [o.theme for o in payload.options]
    if len(set(themes)) != OPTION_COUNT:
        raise SchemaViolation(f"option themes must be distinct, got {[t.value for t in themes]}")

    optimal = [o for o in payload.options if o.optimal]
    if len(optimal) != 1:
        raise SchemaViolation(f"expected exactly one optimal option, got {len(optimal)}")
    if optimal[0].theme is not Theme.REFRAME:
        raise SchemaViolation(f"optimal option must be '{Theme.REFRAME.value}', got '{optimal[0].theme.value}'")

    return ContentBundle(
        core_text=payload.thought.strip(),
        intro_text=payload.introDialogue.strip(),
        options=tuple(
            ContentOption(
                title=o.title.strip(),
                theme=o.theme,
                explanation=o.dialogue.strip(),
                is_optimal=o.optimal,
            )
            for o in payload.options
        ),
    )
