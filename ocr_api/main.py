import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .config import Settings, get_settings
from .errors import MissingFile
from .responses import error_response, generic_error_response, log_failure
from .routes import extract
from .services.ocr_service import configure_engine
from .services.validation import too_large

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/api/extractTextCoordinates"
# Room for multipart boundaries and part headers on top of the file itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_engine(get_settings())
    yield


app = FastAPI(title="OCR Text Coordinates API", lifespan=lifespan)

# Include your API routers
app.include_router(extract.router, prefix="/api", tags=["ocr"])


def _current_settings(app: FastAPI) -> Settings:
    # honour dependency overrides so middleware and route agree on limits
    return app.dependency_overrides.get(get_settings, get_settings)()


@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    """
    Reject uploads whose Content-Length is over the limit before the
    multipart body is parsed (and spooled to disk).
    """
    if request.method == "POST" and request.url.path == UPLOAD_PATH:
        settings = _current_settings(request.app)
        length = request.headers.get("content-length", "")
        if length.isdigit() and int(length) > settings.max_upload_bytes + MULTIPART_OVERHEAD_BYTES:
            error = too_large(settings)
            log_failure(error, "validate")
            return error_response(error.status_code, error.public_message)
    return await call_next(request)


# Multipart field present but not a file
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("Request validation failed for %s: %s", request.url.path, exc.errors())
    return error_response(MissingFile.status_code, MissingFile.default_message)


# Global error handler
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Global Error on %s: %s", request.url.path, exc, exc_info=exc)
    return generic_error_response()


@app.get("/")
async def root():
    return {"message": "OCR Text Coordinates API is running."}


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
