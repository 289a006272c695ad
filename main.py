from __future__ import annotations

import logging
import sys

import uvicorn

from chatrelay.app.api.app import create_app
from chatrelay.app.llm.providers import build_reply_generator
from chatrelay.app.observability.service import configure_logging
from chatrelay.core.config import StartupError, load_config
from chatrelay.core.env import load_env_file

LOGGER = logging.getLogger("chatrelay")


def main() -> int:
    config = load_config()
    applied = load_env_file(config.env_file)
    if applied:
        # the env file may carry the key or any other setting
        config = load_config()
    configure_logging(config.log_level)
    if applied:
        LOGGER.info("Loaded %s settings from %s", len(applied), config.env_file)

    try:
        generator = build_reply_generator(config)
    except StartupError as exc:
        LOGGER.error("Refusing to start: %s", exc)
        return 1

    app = create_app(generator, model=config.model)
    LOGGER.info(
        "Relay listening on http://%s:%s (model=%s timeout=%ss)",
        config.host,
        config.port,
        config.model,
        config.model_timeout_seconds,
    )
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
