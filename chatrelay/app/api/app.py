from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from chatrelay.app.chat.contracts import PROCESSING_ERROR_MESSAGE
from chatrelay.app.chat.service import handle_chat_request
from chatrelay.app.llm.providers import ReplyGenerator

LOGGER = logging.getLogger(__name__)

APP_TITLE = "chatrelay"
APP_VERSION = "0.1.0"


def create_app(
    generator: ReplyGenerator,
    *,
    model: str | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        try:
            yield
        finally:
            try:
                await generator.aclose()
            except Exception:
                LOGGER.warning("Reply generator did not close cleanly", exc_info=True)

    app = FastAPI(
        title=APP_TITLE,
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.post("/")
    async def chat(request: Request) -> PlainTextResponse:
        try:
            raw_body = await request.body()
            response = await handle_chat_request(raw_body, generator, model=model)
            return PlainTextResponse(
                content=response.body,
                status_code=response.status_code,
            )
        except Exception:
            LOGGER.exception("Chat request failed outside the provider call")
            return PlainTextResponse(content=PROCESSING_ERROR_MESSAGE, status_code=500)

    return app
