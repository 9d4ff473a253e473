# ocr_api/services/pipeline.py
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..config import Settings
from ..errors import EngineFailure, PipelineError
from ..schemas import ProjectedResult, UploadedImage
from ..utils.image_utils import normalize_to_png
from .ocr_service import recognize
from .projection import project_result
from .validation import validate_upload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionOutcome:
    """Either a projected result or the error that stopped the request."""
    result: Optional[ProjectedResult] = None
    error: Optional[PipelineError] = None
    failed_stage: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, stage: str, error: PipelineError) -> "ExtractionOutcome":
        return cls(error=error, failed_stage=stage)


async def run_pipeline(upload: UploadedImage | None, settings: Settings) -> ExtractionOutcome:
    """
    validate -> normalize -> recognize -> project.
    Stops at the first failing stage; nothing is retried.
    """
    try:
        image = validate_upload(upload, settings)
    except PipelineError as e:
        return ExtractionOutcome.failure("validate", e)

    try:
        bitmap = await asyncio.to_thread(normalize_to_png, image)
    except PipelineError as e:
        return ExtractionOutcome.failure("normalize", e)

    try:
        recognition = await recognize(bitmap, settings)
    except PipelineError as e:
        return ExtractionOutcome.failure("recognize", e)
    except Exception as e:
        logger.exception("Unexpected error from OCR engine")
        return ExtractionOutcome.failure("recognize", EngineFailure(str(e) or type(e).__name__))

    try:
        projected = project_result(recognition)
    except PipelineError as e:
        return ExtractionOutcome.failure("project", e)

    logger.info(
        "Extracted %d words from %dx%d image",
        len(projected.textCoordinates), bitmap.width, bitmap.height,
    )
    return ExtractionOutcome(result=projected)
