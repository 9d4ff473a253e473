# ocr_api/services/validation.py
from ..config import Settings
from ..errors import MissingFile, TooLarge, UnsupportedType
from ..schemas import UploadedImage


def _format_limit(max_bytes: int) -> str:
    mb = max_bytes / (1024 * 1024)
    return f"{mb:g} MB" if mb >= 1 else f"{max_bytes} bytes"


def too_large(settings: Settings) -> TooLarge:
    return TooLarge(f"File too large. Maximum allowed size is {_format_limit(settings.max_upload_bytes)}.")


def validate_upload(upload: UploadedImage | None, settings: Settings) -> UploadedImage:
    """
    Inspect an upload without decoding it.
    Returns it unchanged, or raises MissingFile / UnsupportedType / TooLarge.
    """
    if upload is None or (not upload.data and not upload.size):
        raise MissingFile()

    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    if content_type not in settings.allowed_mime_types:
        raise UnsupportedType()

    # the route skips reading parts declared over the limit, so the declared
    # size can exceed the buffer length
    if max(upload.size, len(upload.data)) > settings.max_upload_bytes:
        raise too_large(settings)

    return upload
