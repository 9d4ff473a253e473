from fastapi import APIRouter, Depends, File, UploadFile

from ..config import Settings, get_settings
from ..responses import outcome_to_response
from ..schemas import ErrorResponse, ExtractionResponse, UploadedImage
from ..services.pipeline import run_pipeline

router = APIRouter()


async def read_upload(image: UploadFile | None, settings: Settings) -> UploadedImage | None:
    """
    Copy the upload into memory. A part whose declared size is already over
    the limit is not read at all; validation rejects it on size alone.
    """
    if image is None:
        return None
    if image.size is not None and image.size > settings.max_upload_bytes:
        return UploadedImage(data=b"", content_type=image.content_type, size=image.size)
    data = await image.read(settings.max_upload_bytes + 1)
    return UploadedImage(
        data=data,
        content_type=image.content_type,
        size=image.size if image.size is not None else len(data),
    )


@router.post(
    "/extractTextCoordinates",
    response_model=ExtractionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def extract_text_coordinates(
    image: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
):
    """
    Endpoint that:
    1. Accepts an image upload (JPEG, PNG or WEBP, up to 5MB)
    2. Converts it to PNG
    3. Runs OCR on it
    4. Returns the text plus a bounding box for every word
    """
    try:
        upload = await read_upload(image, settings)
        outcome = await run_pipeline(upload, settings)
    finally:
        if image is not None:
            await image.close()
    return outcome_to_response(outcome)
