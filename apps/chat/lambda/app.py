"""Chat relay backend using FastAPI + Mangum for AWS Lambda."""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_relay.config import get_settings
from chat_relay.errors import InternalError, InvalidInputError, NotFoundError, RelayError
from chat_relay.infra.runtime import (
    ensure_langsmith_configured,
    flush_langsmith_traces,
    get_gemini_client,
    get_openai_client,
    invoke_gemini_generate_content,
    invoke_openai_responses,
)
from chat_relay.model_registry import MODEL_CAPABILITIES
from chat_relay.providers.gemini_provider import GeminiChatProvider
from chat_relay.providers.openai_provider import OpenAIChatProvider
from chat_relay.schemas import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from chat_relay.services.relay_service import RelayService

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)
logging.getLogger("chat_relay").setLevel(logging.INFO)


@lru_cache(maxsize=1)
def get_relay_service() -> RelayService:
    settings = get_settings()
    providers = {
        "gemini": GeminiChatProvider(
            get_client=lambda: get_gemini_client(settings.gemini_api_key),
            invoke_generate_content=invoke_gemini_generate_content,
        ),
        "openai": OpenAIChatProvider(
            get_openai_client=lambda: get_openai_client(settings.openai_api_key),
            invoke_responses=invoke_openai_responses,
        ),
    }
    return RelayService(
        settings=settings,
        model_capabilities=MODEL_CAPABILITIES,
        providers=providers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Chat relay started",
        extra={
            "health_url": f"http://localhost:{settings.port}/health",
            "chat_url": f"http://localhost:{settings.port}/api/chat",
        },
    )
    yield


app = FastAPI(title="Chat Relay", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
router = APIRouter(prefix="/api")


def _error_response(error: RelayError) -> JSONResponse:
    body = ErrorResponse(error=error.message)
    if error.details and get_settings().development:
        body.details = error.details
    return JSONResponse(status_code=error.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(
        "Rejected invalid chat request",
        extra={"path": request.url.path, "error_count": len(exc.errors())},
    )
    return _error_response(InvalidInputError())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods on known paths are both "not found".
    if exc.status_code in (404, 405):
        return _error_response(NotFoundError())
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True),
    )


@app.middleware("http")
async def internal_error_boundary(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return _error_response(InternalError(details=str(exc)))


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest) -> ChatResponse:
    """Relay one message to the configured provider and return its reply."""
    ensure_langsmith_configured(get_settings())
    try:
        reply = get_relay_service().generate_reply(request.message)
    finally:
        flush_langsmith_traces()
    return reply.to_response()


app.include_router(router)


handler = Mangum(app)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
