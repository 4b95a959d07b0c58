from datetime import date

from insider_tracker.util.time import iso_date, months_before


def test_months_before_simple():
    assert months_before(date(2024, 10, 15), 3) == date(2024, 7, 15)


def test_months_before_crosses_year():
    assert months_before(date(2024, 2, 10), 12) == date(2023, 2, 10)
    assert months_before(date(2024, 1, 31), 6) == date(2023, 7, 31)


def test_months_before_clamps_day():
    assert months_before(date(2024, 5, 31), 3) == date(2024, 2, 29)
    assert months_before(date(2023, 8, 31), 6) == date(2023, 2, 28)


def test_iso_date():
    assert iso_date(date(2024, 3, 9)) == "2024-03-09"
