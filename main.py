import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from anonchat.core.config import settings
from anonchat.core.errors import ChatStateError
from anonchat.core.logging_config import setup_logging
from anonchat.core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from anonchat.domain.messages.services import ChatCoordinator
from anonchat.web.rendering import STATIC_DIR
from anonchat.web.routes import api, chat, health

setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the single coordinator that owns the board state."""
    app.state.coordinator = ChatCoordinator.from_settings(settings)
    logger.info(
        "Board ready (limit=%d/%ss, max_length=%d, recent=%d, delay=%ss)",
        settings.REQUEST_LIMIT,
        settings.WINDOW_SECONDS,
        settings.MAX_MESSAGE_LENGTH,
        settings.RECENT_MESSAGE_LIMIT,
        settings.PROCESSING_DELAY_SECONDS,
    )
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Anonymous shared message board",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=settings.ALLOWED_HOSTS,
)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# Mount static files
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# Include routers
app.include_router(chat.router, tags=["chat"])
app.include_router(api.router, prefix="/api", tags=["api"])
app.include_router(health.router, tags=["health"])


@app.exception_handler(ChatStateError)
async def chat_state_error_handler(request: Request, exc: ChatStateError):
    """Fail the request when shared board state can no longer be trusted."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.critical("Refusing request on broken chat state: %s [request_id=%s]", exc, request_id)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "The message board is unavailable."},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
