# ocr_api/errors.py
from fastapi import status

GENERIC_ERROR_MESSAGE = "Internal Server Error. Please try again later."


class PipelineError(Exception):
    """
    A classified failure of one pipeline stage.
    `kind` names the failure, `status_code` is what the caller sees.
    """
    kind = "PipelineError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        # 500s never expose internals
        if self.status_code >= 500:
            return GENERIC_ERROR_MESSAGE
        return self.message


# --- Validation-time (user caused) ---

class MissingFile(PipelineError):
    kind = "MissingFile"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No image uploaded. Please upload a valid image."


class UnsupportedType(PipelineError):
    kind = "UnsupportedType"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid file type. Only JPEG, PNG, and WEBP are allowed."


class TooLarge(PipelineError):
    kind = "TooLarge"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "File too large. Maximum allowed size is 5 MB."


# --- Processing-time ---

class DecodeError(PipelineError):
    kind = "DecodeError"


class EngineFailure(PipelineError):
    kind = "EngineFailure"


# --- Processed fine, nothing to report ---

class NoTextFound(PipelineError):
    kind = "NoTextFound"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No readable text found in the image."
