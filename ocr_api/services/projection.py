# ocr_api/services/projection.py
from ..errors import NoTextFound
from ..schemas import Border, ProjectedResult, RecognitionResult, TextCoordinate


def project_result(result: RecognitionResult) -> ProjectedResult:
    """
    Map engine output onto the public shape: one TextCoordinate per engine
    word, same order, (x0, y0, x1, y1) -> (minX, minY, maxX, maxY).
    """
    if not result.text or result.text.strip() == "":
        raise NoTextFound()

    text_coordinates = []
    for word in result.words:
        x0, y0, x1, y1 = word.bbox
        text_coordinates.append(
            TextCoordinate(
                text=word.text,
                border=Border(minX=x0, minY=y0, maxX=x1, maxY=y1),
            )
        )

    return ProjectedResult(extractedText=result.text, textCoordinates=text_coordinates)
