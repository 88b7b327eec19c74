import os

import pytest

os.environ.setdefault("RENDER_API_BASE_URL", "http://render-api.test")
os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")


@pytest.fixture
def single_series_params() -> dict:
    return {
        "jobId": "j1",
        "documentId": "d1",
        "objectWidthMm": 100,
        "objectHeightMm": 50,
        "seriesStart": "A001",
        "seriesCount": 5,
        "seriesXMm": 10,
        "seriesYMm": 10,
        "seriesFontFamily": "Arial",
        "seriesFontSizeMm": 4,
        "seriesLetterSpacingMm": 0,
        "seriesRotationDeg": 0,
        "seriesColor": "#000",
    }


@pytest.fixture
def series_entry() -> dict:
    return {
        "start": "A1",
        "count": 3,
        "fontFamily": "Arial",
        "fontSizeMm": 4,
        "xMm": 1,
        "yMm": 1,
        "letterSpacingMm": 0,
        "rotationDeg": 0,
        "color": "#000",
    }
