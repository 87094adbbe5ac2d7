# Typed records shared by the clients, the validator and the pipelines.

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Dict, Any, Protocol, Tuple, Union


@dataclass(frozen=True)
class Message:
    """Single chat turn: system, user, or assistant."""
    role: str
    content: str


@dataclass(frozen=True)
class GenerationRequest:
    """One prompt for the chat-completions endpoint. Immutable once built."""
    prompt: str
    model: str
    temperature: float = 0.7
    max_tokens: int = 200
    timeout: float = 20.0
    system: Optional[str] = None

    def __post_init__(self):
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"temperature must be within [0, 2], got {self.temperature}")
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def messages(self) -> List[Message]:
        out = []
        if self.system:
            out.append(Message(role="system", content=self.system))
        out.append(Message(role="user", content=self.prompt))
        return out


class ErrorKind(str, Enum):
    CREDENTIAL_MISSING = "credential_missing"
    TRANSPORT_FAILURE = "transport_failure"
    SERVER_ERROR = "server_error"
    MALFORMED_ENVELOPE = "malformed_envelope"
    SCHEMA_VIOLATION = "schema_violation"


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    status: Optional[int] = None


GenerationResult = Union[Ok, Err]


class ModelClient(Protocol):
    """Anything that turns one request into one result: http, SDK or echo."""

    async def send(self, req: GenerationRequest) -> GenerationResult: ...


class Theme(str, Enum):
    AVOIDANCE = "avoidance"
    SELF_CRITICISM = "self_criticism"
    OVER_CONTROL = "over_control"
    REFRAME = "reframe"

    @classmethod
    def ordered(cls) -> Tuple["Theme", ...]:
        """Canonical option order: three unhelpful themes, then the reframe."""
        return (cls.AVOIDANCE, cls.SELF_CRITICISM, cls.OVER_CONTROL, cls.REFRAME)


OPTION_COUNT = 4


@dataclass(frozen=True)
class ContentOption:
    title: str
    theme: Theme
    explanation: str
    is_optimal: bool = False


@dataclass(frozen=True)
class ContentBundle:
    """Validated output of one thought pipeline run."""
    core_text: str
    intro_text: str
    options: Tuple[ContentOption, ...]

    def __post_init__(self):
        # accept any sequence, store a tuple
        object.__setattr__(self, "options", tuple(self.options))
        if len(self.options) != OPTION_COUNT:
            raise ValueError(f"bundle needs exactly {OPTION_COUNT} options, got {len(self.options)}")
        optimal = [o for o in self.options if o.is_optimal]
        if len(optimal) != 1:
            raise ValueError(f"bundle needs exactly one optimal option, got {len(optimal)}")
        if optimal[0].theme is not Theme.REFRAME:
            raise ValueError(f"optimal option must be {Theme.REFRAME.value}, got {optimal[0].theme.value}")
        if len({o.theme for o in self.options}) != OPTION_COUNT:
            raise ValueError("bundle themes must be distinct")

    def strategies(self) -> List[str]:
        return [o.title for o in self.options]

    def explanation(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.options):
            return self.options[index].explanation
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "thought": self.core_text,
            "intro_dialogue": self.intro_text,
            "options": [
                {
                    "title": o.title,
                    "theme": o.theme.value,
                    "explanation": o.explanation,
                    "optimal": o.is_optimal,
                }
                for o in self.options
            ],
        }


@dataclass(frozen=True)
class ChatTurn:
    """One user message and the reply shown for it."""
    user_text: str
    reply: str
    was_safety_triggered: bool = False
