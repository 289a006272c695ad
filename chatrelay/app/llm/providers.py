from __future__ import annotations

import asyncio
from typing import Any, Protocol

import httpx
from google import genai
from google.genai import errors, types

from chatrelay.app.chat.contracts import (
    ConversationTurn,
    FailureKind,
    GenerationSettings,
    ModelIdentity,
    ReplyFailure,
    ReplyResult,
    ReplySuccess,
)
from chatrelay.core.config import RelayConfig, require_api_key


class ReplyGenerator(Protocol):
    async def generate_reply(
        self,
        prompt: str,
        history: tuple[ConversationTurn, ...],
    ) -> ReplyResult: ...

    async def aclose(self) -> None: ...


class GeminiReplyGenerator:
    """Sends one prompt per request through a fresh Gemini chat session.

    The client is shared across requests; sessions are not. Every failure is
    returned as a ``ReplyFailure`` so callers never see provider exceptions.
    """

    def __init__(
        self,
        *,
        identity: ModelIdentity,
        timeout_seconds: float,
        settings: GenerationSettings | None = None,
        api_key: str | None = None,
        client: Any = None,
    ) -> None:
        if client is None:
            client = genai.Client(api_key=api_key)
        self._client = client
        self._identity = identity
        self._settings = settings or GenerationSettings()
        self._timeout_seconds = timeout_seconds
        self._config = build_generate_config(identity, self._settings)

    @property
    def identity(self) -> ModelIdentity:
        return self._identity

    async def generate_reply(
        self,
        prompt: str,
        history: tuple[ConversationTurn, ...],
    ) -> ReplyResult:
        try:
            text = await asyncio.wait_for(
                self._send(prompt, history),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            return ReplyFailure(
                kind=FailureKind.TIMEOUT,
                detail=(
                    f"no reply from {self._identity.model} "
                    f"within {self._timeout_seconds}s"
                ),
                error_class="TimeoutError",
            )
        except httpx.HTTPError as exc:
            return _failure(FailureKind.NETWORK, exc)
        except errors.APIError as exc:
            return _failure(FailureKind.PROVIDER, exc)
        except Exception as exc:
            return _failure(FailureKind.UNEXPECTED, exc)

        if text is None:
            return ReplyFailure(
                kind=FailureKind.EMPTY_RESPONSE,
                detail=f"{self._identity.model} returned no text content",
            )
        return ReplySuccess(text=text)

    async def _send(
        self,
        prompt: str,
        history: tuple[ConversationTurn, ...],
    ) -> str | None:
        chat = self._client.aio.chats.create(
            model=self._identity.model,
            config=self._config,
            history=to_contents(history),
        )
        response = await chat.send_message(prompt)
        return response.text

    async def aclose(self) -> None:
        await self._client.aio.aclose()


def build_generate_config(
    identity: ModelIdentity,
    settings: GenerationSettings,
) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        system_instruction=identity.system_instruction,
        temperature=settings.temperature,
        top_p=settings.top_p,
        top_k=settings.top_k,
        response_mime_type=settings.response_mime_type,
    )


def to_contents(history: tuple[ConversationTurn, ...]) -> list[types.Content]:
    return [
        types.Content(
            role=turn.role,
            parts=[types.Part(text=part.text) for part in turn.parts],
        )
        for turn in history
    ]


def build_reply_generator(config: RelayConfig) -> GeminiReplyGenerator:
    return GeminiReplyGenerator(
        identity=ModelIdentity(model=config.model),
        timeout_seconds=config.model_timeout_seconds,
        api_key=require_api_key(config),
    )


def _failure(kind: FailureKind, exc: Exception) -> ReplyFailure:
    detail = str(exc).strip() or exc.__class__.__name__
    return ReplyFailure(kind=kind, detail=detail, error_class=exc.__class__.__name__)
