from io import BytesIO

import pytest
from PIL import Image

from ocr_api.errors import DecodeError
from ocr_api.schemas import UploadedImage
from ocr_api.utils.image_utils import normalize_to_png


def as_upload(data: bytes, content_type: str) -> UploadedImage:
    return UploadedImage(data=data, content_type=content_type, size=len(data))


@pytest.mark.parametrize("fmt,content_type", [
    ("JPEG", "image/jpeg"),
    ("PNG", "image/png"),
    ("WEBP", "image/webp"),
])
def test_supported_formats_normalize_to_png(make_image, fmt, content_type):
    bitmap = normalize_to_png(as_upload(make_image(fmt, size=(120, 40)), content_type))

    assert (bitmap.width, bitmap.height) == (120, 40)
    with Image.open(BytesIO(bitmap.data)) as img:
        assert img.format == "PNG"
        assert img.mode == "RGB"
        assert img.size == (120, 40)


@pytest.mark.parametrize("mode,color", [("RGBA", (0, 0, 0, 0)), ("L", 128), ("P", 3), ("1", 1)])
def test_other_pixel_modes_become_rgb(make_image, mode, color):
    bitmap = normalize_to_png(as_upload(make_image("PNG", mode=mode, color=color), "image/png"))
    with Image.open(BytesIO(bitmap.data)) as img:
        assert img.mode == "RGB"


def test_truncated_png_is_a_decode_error():
    # noisy content so the IDAT chunk is long enough to cut into
    img = Image.effect_noise((400, 400), 64).convert("RGB")
    buffered = BytesIO()
    img.save(buffered, format="PNG")
    data = buffered.getvalue()

    with pytest.raises(DecodeError):
        normalize_to_png(as_upload(data[: len(data) // 2], "image/png"))


def test_garbage_bytes_are_a_decode_error():
    with pytest.raises(DecodeError):
        normalize_to_png(as_upload(b"definitely not an image", "image/jpeg"))


def test_format_mismatch_is_a_decode_error(make_image):
    # PNG bytes declared as JPEG
    with pytest.raises(DecodeError):
        normalize_to_png(as_upload(make_image("PNG"), "image/jpeg"))


def test_same_input_gives_same_bitmap(make_image):
    data = make_image("JPEG", size=(50, 50), color="blue")
    first = normalize_to_png(as_upload(data, "image/jpeg"))
    second = normalize_to_png(as_upload(data, "image/jpeg"))
    assert first.data == second.data
