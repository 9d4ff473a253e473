# ocr_api/config.py
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Mapping, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Formats the normalizer knows how to decode, keyed by MIME type
SUPPORTED_MIME_TYPES = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_OCR_LANGUAGE = "eng"
DEFAULT_OCR_TIMEOUT_SECONDS = 30.0
DEFAULT_PORT = 3001


@dataclass(frozen=True)
class Settings:
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_mime_types: FrozenSet[str] = frozenset(SUPPORTED_MIME_TYPES)
    ocr_language: str = DEFAULT_OCR_LANGUAGE
    ocr_timeout_seconds: float = DEFAULT_OCR_TIMEOUT_SECONDS
    tesseract_cmd: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _float_env(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _mime_types_env(environ: Mapping[str, str]) -> FrozenSet[str]:
    raw = environ.get("ALLOWED_MIME_TYPES")
    if raw is None or raw.strip() == "":
        return frozenset(SUPPORTED_MIME_TYPES)
    types = frozenset(t.strip().lower() for t in raw.split(",") if t.strip())
    unknown = sorted(types - set(SUPPORTED_MIME_TYPES))
    if unknown:
        raise ValueError(f"ALLOWED_MIME_TYPES contains unsupported types: {', '.join(unknown)}")
    if not types:
        raise ValueError("ALLOWED_MIME_TYPES must name at least one type")
    return types


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables (or any mapping of them).
    Raises ValueError naming the offending variable.
    """
    env = os.environ if environ is None else environ
    return Settings(
        max_upload_bytes=_int_env(env, "MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
        allowed_mime_types=_mime_types_env(env),
        ocr_language=(env.get("OCR_LANGUAGE") or DEFAULT_OCR_LANGUAGE).strip(),
        ocr_timeout_seconds=_float_env(env, "OCR_TIMEOUT_SECONDS", DEFAULT_OCR_TIMEOUT_SECONDS),
        tesseract_cmd=env.get("TESSERACT_CMD") or None,
        host=env.get("HOST") or "0.0.0.0",
        port=_int_env(env, "PORT", DEFAULT_PORT),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


# Dependency to get settings in routes
@lru_cache
def get_settings() -> Settings:
    return load_settings()
