"""HTTP surface: chat streaming and knowledge search endpoints."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field
from starlette.background import BackgroundTask

from hajj_companion.config import Config
from hajj_companion.config_provider import ConfigProvider
from hajj_companion.domain.exceptions import (
    GatewayError,
    InvalidQueryError,
    RetrievalError,
)
from hajj_companion.domain.messages import ChatMessage
from hajj_companion.engine.chat_service import ChatService
from hajj_companion.gateway.gateway_client import ModelGatewayClient
from hajj_companion.gateway.gateway_error_mapper import map_gateway_error
from hajj_companion.infra.utils import setup_logging
from hajj_companion.retrieval.factory import build_retriever

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
SEARCH_FAILED_MESSAGE = "Failed to search knowledge base"
QUERY_REQUIRED_MESSAGE = "Query is required"


class ChatRequest(BaseModel):
    """Body of ``POST /chat``."""

    messages: List[ChatMessage] = Field(description="Conversation so far.")


def parse_search_query(payload: Any) -> str:
    """
    Extracts the query from a ``POST /rag-search`` body.

    Args:
        payload: Decoded JSON body.

    Returns:
        The query string.

    Raises:
        InvalidQueryError: If the query is missing, blank or not a string.
    """
    query = payload.get("query") if isinstance(payload, dict) else None
    if not isinstance(query, str) or not query.strip():
        raise InvalidQueryError(QUERY_REQUIRED_MESSAGE)
    return query


def build_chat_service(config: Config) -> ChatService:
    """Wires the retriever and gateway client selected by configuration."""

    return ChatService(
        retriever=build_retriever(config),
        gateway=ModelGatewayClient.from_config(config),
    )


def create_app(
    config: Optional[Config] = None, chat_service: Optional[ChatService] = None
) -> FastAPI:
    """
    Builds the FastAPI application.

    Args:
        config: Optional configuration; loaded from the environment when omitted.
        chat_service: Optional prebuilt chat service, mainly for tests.

    Returns:
        The configured application.
    """
    config = config or ConfigProvider().load()
    setup_logging(config.log_level)
    service = chat_service or build_chat_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        service.close()

    app = FastAPI(title="Hajj Companion", lifespan=lifespan)
    app.state.chat_service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    @app.exception_handler(InvalidQueryError)
    async def _invalid_query(request: Request, exc: InvalidQueryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected malformed request body", extra={"path": request.url.path})
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(GatewayError)
    async def _gateway_failure(request: Request, exc: GatewayError) -> JSONResponse:
        mapping = map_gateway_error(exc)
        logger.error(
            "Chat request failed",
            extra={"reason": mapping.reason, "status_code": mapping.status_code},
        )
        return JSONResponse(
            status_code=mapping.status_code, content={"error": mapping.message}
        )

    @app.exception_handler(Exception)
    async def _unexpected_failure(request: Request, exc: Exception) -> JSONResponse:
        mapping = map_gateway_error(exc)
        logger.error(
            "Unhandled request failure",
            extra={
                "path": request.url.path,
                "reason": mapping.reason,
                "error_details": mapping.details,
            },
        )
        return JSONResponse(
            status_code=mapping.status_code, content={"error": mapping.message}
        )

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/rag-search")
    def rag_search(payload: Any = Body(default=None)) -> Any:
        query = parse_search_query(payload)
        try:
            items = service.retriever.retrieve(query)
        except RetrievalError:
            logger.exception("Knowledge search failed")
            return JSONResponse(status_code=500, content={"error": SEARCH_FAILED_MESSAGE})
        logger.info("Knowledge search complete", extra={"result_count": len(items)})
        return {"results": [item.to_payload() for item in items]}

    @app.post("/chat")
    def chat(body: ChatRequest) -> StreamingResponse:
        upstream = service.stream(body.messages)
        return StreamingResponse(
            upstream.iter_bytes(),
            media_type="text/event-stream",
            background=BackgroundTask(upstream.close),
        )

    return app
