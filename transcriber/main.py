import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from transcriber.config import LOG_LEVEL
from transcriber.errors import TranscriberError
from transcriber.models.transcription import ErrorResponse
from transcriber.routers import transcribe

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

app = FastAPI(
    title="Meeting Transcriber",
    description="Transcribe meeting recordings, label speakers and summarize with OpenAI",
    version="0.1.0",
)

app.include_router(transcribe.router)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(TranscriberError)
async def transcriber_error_handler(request: Request, exc: TranscriberError):
    if exc.status_code < 500:
        body = ErrorResponse(error=exc.message)
    else:
        logger.error("Transcription error: %s", exc.message)
        body = ErrorResponse(error="Transcription failed", message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )
