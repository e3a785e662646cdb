from datetime import time

import pytest

from tutorlink.utils.time_of_day import format_time_of_day, parse_time_of_day


def test_parse_accepts_minutes_and_seconds():
    assert parse_time_of_day("09:30") == time(9, 30)
    assert parse_time_of_day("23:59:59") == time(23, 59, 59)


@pytest.mark.parametrize("raw", ["9:30", "24:00", "12:60", "noon", "", "10:00:00:00", None, 930])
def test_parse_rejects_invalid_values(raw):
    with pytest.raises(ValueError):
        parse_time_of_day(raw)


def test_format_drops_zero_seconds():
    assert format_time_of_day(time(8, 5)) == "08:05"
    assert format_time_of_day(time(8, 5, 30)) == "08:05:30"
