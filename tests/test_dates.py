from datetime import datetime, timedelta

from flow_app.core.dates import ceil_days, days_between, parse_date


def test_parse_pm_time():
    dt = parse_date("15/mar/24 02:30 PM")
    assert dt == datetime(2024, 3, 15, 14, 30)
    assert (dt.day, dt.month - 1, dt.year, dt.hour, dt.minute) == (15, 2, 2024, 14, 30)


def test_parse_noon_and_midnight():
    assert parse_date("01/jan/24 12:15 PM").hour == 12
    assert parse_date("01/jan/24 12:15 AM").hour == 0
    assert parse_date("01/jan/24 11:59 AM").hour == 11


def test_parse_month_case_insensitive():
    assert parse_date("5/DEZ/23 09:00 AM") == datetime(2023, 12, 5, 9, 0)
    assert parse_date("5/Fev/24 09:00 AM").month == 2


def test_parse_two_digit_year_always_2000s():
    assert parse_date("01/jan/99 10:00 AM").year == 2099
    assert parse_date("01/jan/00 10:00 AM").year == 2000


def test_parse_without_period_keeps_hour():
    assert parse_date("01/jan/24 07:45") == datetime(2024, 1, 1, 7, 45)
    assert parse_date("01/jan/24 15:45") == datetime(2024, 1, 1, 15, 45)


def test_parse_empty_and_invalid():
    assert parse_date("") is None
    assert parse_date("   ") is None
    assert parse_date(None) is None
    assert parse_date("31/xyz/24 10:00 AM") is None
    assert parse_date("15/mar/24") is None
    assert parse_date("aa/mar/24 10:00 AM") is None
    assert parse_date("2024-03-15T10:00:00") is None


def test_days_between_ceiling():
    assert days_between("01/jan/24 10:00 AM", "01/jan/24 10:00 AM") == 0
    assert days_between("01/jan/24 11:00 PM", "02/jan/24 01:00 AM") == 1
    assert days_between("01/jan/24 11:00 PM", "02/jan/24 10:59 PM") == 1
    assert days_between("01/jan/24 10:00 AM", "01/jan/24 10:01 AM") == 1
    assert days_between("01/jan/24 10:00 AM", "03/jan/24 10:00 AM") == 2
    assert days_between("01/jan/24 10:00 AM", "03/jan/24 10:01 AM") == 3


def test_days_between_missing_endpoint():
    assert days_between("", "01/jan/24 10:00 AM") is None
    assert days_between("01/jan/24 10:00 AM", None) is None
    assert days_between("01/xyz/24 10:00 AM", "01/jan/24 10:00 AM") is None


def test_days_between_reversed_is_negative():
    assert days_between("05/jan/24 10:00 AM", "01/jan/24 10:00 AM") == -4
    # -4 days + 1 hour rounds up to -3
    assert days_between("05/jan/24 10:00 AM", "01/jan/24 11:00 AM") == -3


def test_ceil_days():
    assert ceil_days(timedelta(0)) == 0
    assert ceil_days(timedelta(hours=2)) == 1
    assert ceil_days(timedelta(days=4)) == 4
    assert ceil_days(timedelta(hours=-2)) == 0


def test_parse_lowercase_period_marker():
    assert parse_date("15/mar/24 02:30 pm") == datetime(2024, 3, 15, 14, 30)
    assert parse_date("15/mar/24 12:05 am") == datetime(2024, 3, 15, 0, 5)


def test_oversized_numbers_are_unparseable():
    assert parse_date("01/jan/99999999999999999999 10:00 AM") is None
    assert parse_date("99999999999999999999/jan/24 10:00 AM") is None
    assert days_between("01/jan/24 10:00 AM", "01/jan/99999999999999999999 10:00 AM") is None


def test_unparseable_date_is_logged_at_debug(flow_logs):
    assert parse_date("31/xyz/24 10:00 AM") is None
    assert "Unparseable date '31/xyz/24 10:00 AM'" in flow_logs.text
