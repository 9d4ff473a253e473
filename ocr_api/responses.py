# ocr_api/responses.py
import logging

from fastapi import status
from fastapi.responses import JSONResponse

from .errors import GENERIC_ERROR_MESSAGE, PipelineError
from .schemas import ErrorResponse, ExtractionResponse
from .services.pipeline import ExtractionOutcome

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def generic_error_response() -> JSONResponse:
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def log_failure(error: PipelineError, stage: str | None = None) -> None:
    where = f" during {stage}" if stage else ""
    if error.status_code >= 500:
        logger.error("Error processing image%s: %s: %s", where, error.kind, error.message, exc_info=error)
    else:
        logger.warning("Rejected request%s: %s: %s", where, error.kind, error.message)


def outcome_to_response(outcome: ExtractionOutcome) -> JSONResponse:
    """
    The one place that turns pipeline outcomes into status codes and bodies.
    """
    if outcome.ok:
        body = ExtractionResponse(
            extractedText=outcome.result.extractedText,
            textCoordinates=outcome.result.textCoordinates,
        )
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump())

    log_failure(outcome.error, outcome.failed_stage)
    return error_response(outcome.error.status_code, outcome.error.public_message)
