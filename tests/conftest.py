from __future__ import annotations

import pytest

from chatrelay.app.chat.contracts import ConversationTurn, ReplyResult, ReplySuccess

RELAY_ENV_NAMES = (
    "AI_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "RELAY_MODEL",
    "RELAY_HOST",
    "RELAY_PORT",
    "RELAY_MODEL_TIMEOUT_SECONDS",
    "RELAY_LOG_LEVEL",
    "RELAY_ENV_FILE",
)


class StubReplyGenerator:
    def __init__(
        self,
        result: ReplyResult | None = None,
        error: Exception | None = None,
    ) -> None:
        self.result = result or ReplySuccess(text="stub reply")
        self.error = error
        self.calls: list[tuple[str, tuple[ConversationTurn, ...]]] = []
        self.closed = False

    async def generate_reply(
        self,
        prompt: str,
        history: tuple[ConversationTurn, ...],
    ) -> ReplyResult:
        self.calls.append((prompt, history))
        if self.error is not None:
            raise self.error
        return self.result

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def clean_relay_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in RELAY_ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stub_generator() -> StubReplyGenerator:
    return StubReplyGenerator()
