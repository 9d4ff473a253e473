# ocr_api/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional, Tuple

# --- Per-request entities (never outlive one request) ---

# Upload as handed over by the multipart parser
class UploadedImage(BaseModel):
    data: bytes
    content_type: Optional[str] = None
    size: int


# PNG bytes the OCR engine always accepts
class CanonicalBitmap(BaseModel):
    data: bytes
    width: int
    height: int


# Engine-native word: bbox is (x0, y0, x1, y1), passed through as reported
class RecognizedWord(BaseModel):
    text: str
    bbox: Tuple[int, int, int, int]


class RecognitionResult(BaseModel):
    text: str
    words: List[RecognizedWord] = []


# --- Response envelope ---

class Border(BaseModel):
    minX: int
    minY: int
    maxX: int
    maxY: int


class TextCoordinate(BaseModel):
    text: str
    border: Border


class ProjectedResult(BaseModel):
    extractedText: str
    textCoordinates: List[TextCoordinate]


class ExtractionResponse(BaseModel):
    success: bool = True
    extractedText: str
    textCoordinates: List[TextCoordinate]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str = Field(min_length=1)

