from datetime import datetime

import pytest

from herohub.utils.formatting import format_date, format_time


@pytest.mark.parametrize("value, expected", [
    (datetime(2024, 1, 5), "1/5/2024"),
    (datetime(2024, 12, 25), "12/25/2024"),
])
def test_format_date(value, expected):
    assert format_date(value) == expected


@pytest.mark.parametrize("value, expected", [
    (datetime(2024, 1, 1, 0, 0), "12:00 AM"),
    (datetime(2024, 1, 1, 9, 5), "9:05 AM"),
    (datetime(2024, 1, 1, 12, 0), "12:00 PM"),
    (datetime(2024, 1, 1, 23, 59), "11:59 PM"),
])
def test_format_time(value, expected):
    assert format_time(value) == expected
