from __future__ import annotations

import json
import logging
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as SchemaValidationError

from chatrelay.app.chat.contracts import (
    PROCESSING_ERROR_MESSAGE,
    PROMPT_REQUIRED_MESSAGE,
    ChatResponse,
    ConversationTurn,
    FailureKind,
    ReplyFailure,
    ReplySuccess,
    TurnPart,
)
from chatrelay.app.chat.models import HistoryTurn
from chatrelay.app.llm.providers import ReplyGenerator
from chatrelay.app.observability.service import emit_reply_failure

LOGGER = logging.getLogger(__name__)


class ValidationError(Exception):
    pass


def decode_body(raw_body: bytes) -> dict[str, Any]:
    if not raw_body:
        raise ValidationError(PROMPT_REQUIRED_MESSAGE)
    try:
        payload = json.loads(raw_body)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise ValidationError(PROMPT_REQUIRED_MESSAGE) from exc
    if not isinstance(payload, dict):
        raise ValidationError(PROMPT_REQUIRED_MESSAGE)
    return payload


def extract_prompt(payload: dict[str, Any]) -> str:
    prompt = payload.get("prompt")
    if not isinstance(prompt, str) or not prompt:
        raise ValidationError(PROMPT_REQUIRED_MESSAGE)
    return prompt


def parse_history(value: Any) -> tuple[ConversationTurn, ...]:
    if not isinstance(value, list):
        return tuple()

    turns: list[ConversationTurn] = []
    dropped = 0
    for entry in value:
        try:
            parsed = HistoryTurn.model_validate(entry)
        except SchemaValidationError:
            dropped += 1
            continue
        turns.append(
            ConversationTurn(
                role=parsed.role,
                parts=tuple(TurnPart(text=part.text) for part in parsed.parts),
            )
        )

    if dropped:
        LOGGER.warning(
            "Dropped %s malformed history entries (kept %s)", dropped, len(turns)
        )
    return tuple(turns)


async def handle_chat_request(
    raw_body: bytes,
    generator: ReplyGenerator,
    *,
    model: str | None = None,
) -> ChatResponse:
    try:
        payload = decode_body(raw_body)
        prompt = extract_prompt(payload)
    except ValidationError as exc:
        LOGGER.debug("Rejected chat request: %s", exc)
        return ChatResponse(status_code=400, body=PROMPT_REQUIRED_MESSAGE)

    history = parse_history(payload.get("history"))
    request_id = uuid4().hex

    try:
        result = await generator.generate_reply(prompt, history)
    except Exception as exc:
        # generators are expected to return failures, not raise them
        result = ReplyFailure(
            kind=FailureKind.UNEXPECTED,
            detail=str(exc) or exc.__class__.__name__,
            error_class=exc.__class__.__name__,
        )

    if isinstance(result, ReplySuccess):
        return ChatResponse(status_code=200, body=result.text)

    emit_reply_failure(result, request_id=request_id, model=model, logger=LOGGER)
    return ChatResponse(status_code=500, body=PROCESSING_ERROR_MESSAGE)
