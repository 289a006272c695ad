from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SYSTEM_INSTRUCTION = "Make every response very short,maximum 150 characters length"
PROMPT_REQUIRED_MESSAGE = "Prompt is required."
PROCESSING_ERROR_MESSAGE = "Error processing request. Check server logs for details."


@dataclass(frozen=True)
class TurnPart:
    text: str


@dataclass(frozen=True)
class ConversationTurn:
    role: str
    parts: tuple[TurnPart, ...]


@dataclass(frozen=True)
class GenerationSettings:
    temperature: float = 0.0
    top_p: float = 0.95
    top_k: int = 64
    response_mime_type: str = "text/plain"


@dataclass(frozen=True)
class ModelIdentity:
    model: str
    system_instruction: str = SYSTEM_INSTRUCTION


class FailureKind(str, Enum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    PROVIDER = "provider"
    EMPTY_RESPONSE = "empty_response"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ReplySuccess:
    text: str


@dataclass(frozen=True)
class ReplyFailure:
    kind: FailureKind
    detail: str
    error_class: str | None = None


ReplyResult = ReplySuccess | ReplyFailure


@dataclass(frozen=True)
class ChatResponse:
    status_code: int
    body: str
