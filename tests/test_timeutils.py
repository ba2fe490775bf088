from datetime import date

import pytest

from seminar_booking.core.errors import ValidationError
from seminar_booking.services.timeutils import (
    from_minutes,
    normalize_time,
    to_minutes,
    validate_not_past,
    validate_range,
)


def test_to_minutes():
    assert to_minutes("00:00") == 0
    assert to_minutes("9:05") == 545
    assert to_minutes("23:59") == 1439


@pytest.mark.parametrize("bad", ["24:00", "12:60", "1200", "12:5", "", "ab:cd", None])
def test_to_minutes_rejects_malformed(bad):
    with pytest.raises(ValidationError):
        to_minutes(bad)


def test_normalize_pads_hour():
    assert normalize_time("9:00") == "09:00"
    assert from_minutes(570) == "09:30"


def test_validate_range_requires_end_after_start():
    assert validate_range("9:00", "10:00") == ("09:00", "10:00")
    with pytest.raises(ValidationError):
        validate_range("10:00", "10:00")
    with pytest.raises(ValidationError):
        validate_range("11:00", "10:00")


def test_validate_not_past_includes_today():
    today = date(2030, 1, 10)
    validate_not_past(date(2030, 1, 10), today)
    validate_not_past(date(2030, 1, 11), today)
    with pytest.raises(ValidationError):
        validate_not_past(date(2030, 1, 9), today)
