# ocr_api/services/ocr_service.py
import asyncio
import logging
from io import BytesIO

import pytesseract
from PIL import Image

from ..config import Settings
from ..errors import EngineFailure
from ..schemas import CanonicalBitmap, RecognitionResult, RecognizedWord

logger = logging.getLogger(__name__)

# OEM 3 = default engine, PSM 3 = fully automatic page segmentation
TESSERACT_CONFIG = "--oem 3 --psm 3"
WORD_LEVEL = 5


def _as_int(value, default: int = 0) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def words_from_data(data: dict):
    """
    Walk image_to_data DICT output and yield ((block, par, line), word)
    for every word-level row carrying text, in Tesseract's reading order.
    """
    texts = data.get("text") or []
    for i in range(len(texts)):
        if _as_int(data["level"][i]) != WORD_LEVEL:
            continue
        txt = str(texts[i]).strip()
        if not txt:
            continue
        left, top = _as_int(data["left"][i]), _as_int(data["top"][i])
        word = RecognizedWord(
            text=txt,
            bbox=(left, top, left + _as_int(data["width"][i]), top + _as_int(data["height"][i])),
        )
        line_key = (
            _as_int(data["page_num"][i]),
            _as_int(data["block_num"][i]),
            _as_int(data["par_num"][i]),
            _as_int(data["line_num"][i]),
        )
        yield line_key, word


def assemble_text(keyed_words) -> str:
    """Words joined by spaces, lines by newlines, paragraphs by a blank line."""
    paragraphs = []
    current_par = None
    current_line = None
    for (page, block, par, line), word in keyed_words:
        if (page, block, par) != current_par:
            paragraphs.append([[word.text]])
            current_par = (page, block, par)
            current_line = line
        elif line != current_line:
            paragraphs[-1].append([word.text])
            current_line = line
        else:
            paragraphs[-1][-1].append(word.text)

    return "\n\n".join(
        "\n".join(" ".join(words) for words in lines) for lines in paragraphs
    )


def run_ocr(bitmap: CanonicalBitmap, language: str, timeout: float = 0) -> RecognitionResult:
    """
    Run Tesseract once over a canonical bitmap and return the full text plus
    every recognized word with its engine-native box [x0, y0, x1, y1].
    Blocking; raises EngineFailure on any engine-side problem.
    """
    try:
        with Image.open(BytesIO(bitmap.data)) as img:
            data = pytesseract.image_to_data(
                img,
                lang=language,
                config=TESSERACT_CONFIG,
                output_type=pytesseract.Output.DICT,
                timeout=timeout,
            )
    except pytesseract.TesseractNotFoundError as e:
        raise EngineFailure("Tesseract binary not found on PATH") from e
    except (RuntimeError, OSError, ValueError) as e:
        # TesseractError and the timeout are both RuntimeErrors
        raise EngineFailure(f"Tesseract failed: {e}") from e

    keyed = list(words_from_data(data or {}))
    return RecognitionResult(
        text=assemble_text(keyed),
        words=[word for _, word in keyed],
    )


def configure_engine(settings: Settings) -> None:
    """Point pytesseract at a specific binary; called once at startup."""
    if settings.tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd
        logger.info("Using tesseract binary at %s", settings.tesseract_cmd)


async def recognize(bitmap: CanonicalBitmap, settings: Settings) -> RecognitionResult:
    """Run OCR on a worker thread so the event loop stays free."""
    logger.debug(
        "Running OCR on %dx%d bitmap (lang=%s, timeout=%ss)",
        bitmap.width, bitmap.height, settings.ocr_language, settings.ocr_timeout_seconds,
    )
    return await asyncio.to_thread(
        run_ocr, bitmap, settings.ocr_language, settings.ocr_timeout_seconds
    )
