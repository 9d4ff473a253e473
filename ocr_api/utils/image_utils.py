# ocr_api/utils/image_utils.py
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ..config import SUPPORTED_MIME_TYPES
from ..errors import DecodeError
from ..schemas import CanonicalBitmap, UploadedImage

CANONICAL_FORMAT = "PNG"


def normalize_to_png(upload: UploadedImage) -> CanonicalBitmap:
    """
    Decode a validated upload as the format its MIME type declares and
    re-encode it as an RGB PNG. Anything Pillow cannot fully decode is a
    DecodeError.
    """
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    declared = SUPPORTED_MIME_TYPES.get(content_type)
    if declared is None:
        raise DecodeError(f"No decoder for content type {content_type!r}")

    try:
        with Image.open(BytesIO(upload.data), formats=[declared]) as img:
            # Image.open is lazy; load() surfaces truncated data
            img.load()
            rgb = img.convert("RGB")
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large to decode: {e}") from e
    except (UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Could not decode {declared} image: {e}") from e

    buffered = BytesIO()
    rgb.save(buffered, format=CANONICAL_FORMAT)
    width, height = rgb.size
    return CanonicalBitmap(data=buffered.getvalue(), width=width, height=height)
