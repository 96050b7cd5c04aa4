import pytest

from app.results_scraper.date_utils import normalize_date


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-03-03", "2024-03-03"),
        ("03/09/2024", "2024-03-09"),
        ("March 3, 2024", "2024-03-03"),
        ("Mar 3, 2024", "2024-03-03"),
        ("3 March 2024", "2024-03-03"),
        ("2024-03-03T00:00:00.000Z", "2024-03-03"),
        ("  2024/03/03 ", "2024-03-03"),
    ],
)
def test_normalize_date_parses_known_layouts(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["", "TBD", "Spring 2024", "2024-13-45"])
def test_normalize_date_passes_through_unparseable(raw: str) -> None:
    assert normalize_date(raw) == raw


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2024-03-03T23:30:00-05:00", "2024-03-04"),
        ("2024-03-04T01:00:00+02:00", "2024-03-03"),
        ("2024-03-03T23:30:00", "2024-03-03"),
    ],
)
def test_normalize_date_uses_utc_calendar_day_for_offsets(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected
