# docuvoice/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import (
    ai_router,
    chat_history_router,
    chat_sessions_router,
    documents_router,
    extraction_router,
    speech_router,
    users_router,
)
from .api.deps import close_ai_client
from .config import settings
from .database import init_db
from .errors import DocuVoiceError
from .utils.logging import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield
    await close_ai_client()


app = FastAPI(title="DocuVoice API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users_router)
app.include_router(documents_router)
app.include_router(chat_sessions_router)
app.include_router(chat_history_router)
app.include_router(ai_router)
app.include_router(extraction_router)
app.include_router(speech_router)


@app.exception_handler(DocuVoiceError)
async def docuvoice_error_handler(request: Request, exc: DocuVoiceError):
    expose_details = settings.is_development or not exc.redact_details
    log = api_logger.error if exc.status_code >= 500 else api_logger.warning
    log("Request failed", extra={
        "path": request.url.path,
        "status_code": exc.status_code,
        "error": exc.message,
        "details": str(exc.details) if exc.details is not None else None
    })
    content = exc.to_dict(expose_details=expose_details)
    if not expose_details:
        content["details"] = "Internal error"
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    api_logger.warning("Invalid request payload", extra={
        "path": request.url.path,
        "errors": len(exc.errors())
    })
    details = [
        {"field": ".".join(str(part) for part in error.get("loc", ())), "message": error.get("msg")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    api_logger.critical("Unhandled error", extra={
        "path": request.url.path,
        "error": str(exc)
    }, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/")
async def root():
    return {"message": "DocuVoice API is running"}
