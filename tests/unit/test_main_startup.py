from __future__ import annotations

import logging
from typing import Any

import pytest

import main


@pytest.fixture
def captured_run(monkeypatch: pytest.MonkeyPatch, tmp_path) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    def fake_run(app: Any, **kwargs: Any) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(main.uvicorn, "run", fake_run)
    # keep pytest's log capture handler installed
    monkeypatch.setattr(main, "configure_logging", lambda level: None)
    monkeypatch.setenv("RELAY_ENV_FILE", str(tmp_path / "absent.env"))
    return calls


def test_main_refuses_to_start_without_api_key(captured_run, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="chatrelay"):
        exit_code = main.main()

    assert exit_code == 1
    assert captured_run == []
    assert any("Refusing to start" in message for message in caplog.messages)


def test_main_serves_configured_port_with_api_key(
    captured_run, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("AI_KEY", "relay-key")
    monkeypatch.setenv("RELAY_PORT", "8181")
    monkeypatch.setattr(
        "chatrelay.app.llm.providers.genai.Client",
        lambda *, api_key: object(),
    )

    exit_code = main.main()

    assert exit_code == 0
    assert len(captured_run) == 1
    assert captured_run[0]["port"] == 8181
    assert captured_run[0]["host"] == "0.0.0.0"


def test_main_reads_api_key_from_env_file(
    captured_run, monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("AI_KEY=file-key\n", encoding="utf-8")
    monkeypatch.setenv("RELAY_ENV_FILE", str(env_file))
    seen: dict[str, str] = {}

    def fake_client(*, api_key: str) -> object:
        seen["api_key"] = api_key
        return object()

    monkeypatch.setattr("chatrelay.app.llm.providers.genai.Client", fake_client)

    exit_code = main.main()

    assert exit_code == 0
    assert seen == {"api_key": "file-key"}
