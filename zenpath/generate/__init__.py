# Generation package: request/result types, model clients, response validation.

from .types import (
    ChatTurn,
    ContentBundle,
    ContentOption,
    Err,
    ErrorKind,
    GenerationRequest,
    GenerationResult,
    Message,
    ModelClient,
    Ok,
    Theme,
)
from .credentials import CredentialResolver
from .validator import SchemaViolation, parse_option_list, parse_structured_bundle, DEFAULT_FILLER
from .clients.echo_dev_client import EchoDevClient
from .clients.http_client import ChatCompletionsClient

__all__ = [
    "ChatTurn", "ContentBundle", "ContentOption", "Err", "ErrorKind", "GenerationRequest",
    "GenerationResult", "Message", "ModelClient", "Ok", "Theme", "CredentialResolver",
    "SchemaViolation", "parse_option_list", "parse_structured_bundle", "DEFAULT_FILLER",
    "EchoDevClient", "ChatCompletionsClient",
]
