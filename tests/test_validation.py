"""Tests for input sanitization helpers."""
import base64
from datetime import datetime, timedelta, timezone

import pytest

from exceptions import ValidationError
from utils.data_url import data_url_from_base64, encode_data_url
from utils.date_helpers import format_date_display, is_within_last_days, to_naive_utc
from utils.validation import (
    validate_amount,
    validate_ifsc_code,
    validate_pan_card,
    validate_phone_number,
    validate_required_string,
    validate_truck_number,
)


@pytest.mark.parametrize("raw,expected", [
    ("MH-12-AB-1234", "MH-12-AB-1234"),
    ("mh12ab1234", "MH-12-AB-1234"),
    ("DL 01 CD 5678", "DL-01-CD-5678"),
    ("KA051234", "KA-05-1234"),
])
def test_validate_truck_number(raw, expected):
    """Test registration numbers are normalized."""
    assert validate_truck_number(raw) == expected


@pytest.mark.parametrize("raw", ["", "12-MH-AB", "MH-123-AB-1234"])
def test_validate_truck_number_rejects(raw):
    """Test malformed registration numbers."""
    with pytest.raises(ValidationError):
        validate_truck_number(raw)


def test_validate_pan_card():
    """Test PAN format."""
    assert validate_pan_card(" abcde1234f ") == "ABCDE1234F"
    with pytest.raises(ValidationError):
        validate_pan_card("ABCD1234F")


def test_validate_ifsc_code():
    """Test IFSC format."""
    assert validate_ifsc_code("hdfc0001234") == "HDFC0001234"
    with pytest.raises(ValidationError):
        validate_ifsc_code("HDFC1001234")


def test_validate_phone_number():
    """Test phone numbers keep a leading plus and their digits."""
    assert validate_phone_number("555-0101") == "5550101"
    assert validate_phone_number("+91 98765 43210") == "+919876543210"
    with pytest.raises(ValidationError):
        validate_phone_number("12345")


def test_validate_amount():
    """Test money amounts."""
    assert validate_amount(0) == 0.0
    assert validate_amount(50000) == 50000.0
    with pytest.raises(ValidationError):
        validate_amount(-1)
    with pytest.raises(ValidationError):
        validate_amount(0, allow_zero=False)
    with pytest.raises(ValidationError):
        validate_amount(True)


def test_validate_required_string():
    """Test required strings are stripped and length checked."""
    assert validate_required_string("  Pune  ", "Location") == "Pune"
    with pytest.raises(ValidationError):
        validate_required_string("   ", "Location")
    with pytest.raises(ValidationError):
        validate_required_string("x" * 11, "Location", max_length=10)


def test_encode_data_url():
    """Test file bytes become a base64 data URL."""
    assert encode_data_url(b"hi", "text/plain") == "data:text/plain;base64,aGk="
    assert encode_data_url(b"hi").startswith("data:application/octet-stream;base64,")


def test_data_url_from_base64():
    """Test client base64 is wrapped, and data URLs pass through."""
    payload = base64.b64encode(b"%PDF-1.4").decode()

    assert data_url_from_base64(payload, "application/pdf") == f"data:application/pdf;base64,{payload}"
    assert data_url_from_base64("data:image/png;base64,AA==") == "data:image/png;base64,AA=="

    with pytest.raises(ValidationError):
        data_url_from_base64("not base64!")


def test_window_bounds():
    """Test the window includes both ends."""
    now = datetime(2024, 7, 25, 12, 0)

    assert is_within_last_days(datetime(2024, 7, 18, 12, 0), 7, now)
    assert is_within_last_days(now, 7, now)
    assert not is_within_last_days(datetime(2024, 7, 18, 11, 59), 7, now)
    assert not is_within_last_days(None, 7, now)


def test_dates_are_naive_utc():
    """Test aware datetimes are converted and display uses the local zone."""
    aware = datetime(2024, 7, 25, 17, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))

    assert to_naive_utc(aware) == datetime(2024, 7, 25, 12, 0)
    assert format_date_display(datetime(2024, 7, 25, 12, 0), include_time=True,
                               timezone_str="Asia/Kolkata") == "25 Jul 2024, 05:30 PM"
    assert format_date_display(None) == ""
