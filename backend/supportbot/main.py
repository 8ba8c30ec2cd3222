import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from supportbot.config import settings
from supportbot.errors import InternalError, SupportBotError
from supportbot.logging_config import setup_logging
from supportbot.routes import chat, documents, health, initialize

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(settings.log_level)
    yield


app = FastAPI(title="Support Chatbot", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SupportBotError)
async def handle_supportbot_error(request: Request, exc: SupportBotError) -> JSONResponse:
    logger.warning(
        "Request failed",
        extra={"path": request.url.path, "status": exc.status_code, "error": exc.message},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    missing_message = any(
        err.get("loc", ())[-1:] == ("message",) for err in exc.errors()
    )
    message = "Message is required" if missing_message else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path}, exc_info=exc)
    error = InternalError("Internal server error")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.include_router(health.router)
app.include_router(chat.router)
app.include_router(documents.router)
app.include_router(initialize.router)
