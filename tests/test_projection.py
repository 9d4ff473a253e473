import pytest

from ocr_api.errors import NoTextFound
from ocr_api.schemas import RecognitionResult, RecognizedWord
from ocr_api.services.projection import project_result


def word(text, x0, y0, x1, y1):
    return RecognizedWord(text=text, bbox=(x0, y0, x1, y1))


@pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
def test_blank_text_is_no_text_found(text):
    with pytest.raises(NoTextFound) as exc:
        project_result(RecognitionResult(text=text, words=[]))
    assert exc.value.message == "No readable text found in the image."
    assert exc.value.status_code == 400


def test_boxes_are_renamed_not_changed():
    result = RecognitionResult(text="Hello", words=[word("Hello", 3, 4, 30, 18)])
    projected = project_result(result)

    (coord,) = projected.textCoordinates
    assert coord.text == "Hello"
    assert coord.border.model_dump() == {"minX": 3, "minY": 4, "maxX": 30, "maxY": 18}
    assert projected.extractedText == "Hello"


def test_order_and_count_are_preserved():
    # deliberately not sorted by position
    words = [
        word("second", 100, 0, 150, 10),
        word("first", 0, 0, 40, 10),
        word("first", 0, 50, 40, 60),
    ]
    projected = project_result(RecognitionResult(text="second first\nfirst", words=words))

    assert len(projected.textCoordinates) == len(words)
    assert [c.text for c in projected.textCoordinates] == ["second", "first", "first"]
    assert [c.border.minX for c in projected.textCoordinates] == [100, 0, 0]


def test_extracted_text_is_returned_untrimmed():
    projected = project_result(RecognitionResult(text=" hi \n", words=[word("hi", 0, 0, 1, 1)]))
    assert projected.extractedText == " hi \n"
