from io import BytesIO

import pytest
from PIL import Image

from ocr_api.config import Settings


def _encode(fmt: str = "PNG", size=(64, 32), color="white", mode: str = "RGB") -> bytes:
    img = Image.new(mode, size, color)
    buffered = BytesIO()
    img.save(buffered, format=fmt)
    return buffered.getvalue()


def _tesseract_dict(words):
    """
    Build image_to_data DICT output. Each word is
    (text, left, top, width, height, block, par, line) with an optional conf.
    A page row and a line row are emitted too, like the real engine does.
    """
    cols = ["level", "page_num", "block_num", "par_num", "line_num", "word_num",
            "left", "top", "width", "height", "conf", "text"]
    data = {c: [] for c in cols}

    def add(level, block, par, line, word_num, left, top, width, height, conf, text):
        for col, val in zip(cols, [level, 1, block, par, line, word_num, left, top, width, height, conf, text]):
            data[col].append(val)

    add(1, 0, 0, 0, 0, 0, 0, 800, 600, -1, "")
    for i, w in enumerate(words):
        text, left, top, width, height, block, par, line = w[:8]
        conf = w[8] if len(w) > 8 else 90
        add(4, block, par, line, 0, left, top, width, height, -1, "")
        add(5, block, par, line, i + 1, left, top, width, height, conf, text)
    return data


@pytest.fixture
def make_image():
    return _encode


@pytest.fixture
def tesseract_dict():
    return _tesseract_dict


@pytest.fixture
def settings():
    return Settings()
