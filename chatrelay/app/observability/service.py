from __future__ import annotations

import json
import logging

from chatrelay.app.chat.contracts import ReplyFailure

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=True)


def emit_reply_failure(
    failure: ReplyFailure,
    *,
    request_id: str,
    model: str | None = None,
    logger: logging.Logger | None = None,
) -> None:
    active_logger = logger or logging.getLogger(__name__)
    payload = {
        "request_id": request_id,
        "model": model,
        "failure_kind": failure.kind.value,
        "error_class": failure.error_class,
        "detail": failure.detail,
    }
    active_logger.error("provider_failure %s", json.dumps(payload, sort_keys=True))
