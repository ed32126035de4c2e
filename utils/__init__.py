"""Utility modules."""
from utils.validation import (
    validate_truck_number,
    validate_pan_card,
    validate_ifsc_code,
    validate_phone_number,
    validate_amount,
    validate_required_string,
)
from utils.date_helpers import (
    utcnow,
    to_naive_utc,
    window_start,
    is_within_last_days,
    format_date_display,
)
from utils.identifiers import IdGenerator
from utils.data_url import encode_data_url, data_url_from_base64

__all__ = [
    "validate_truck_number",
    "validate_pan_card",
    "validate_ifsc_code",
    "validate_phone_number",
    "validate_amount",
    "validate_required_string",
    "utcnow",
    "to_naive_utc",
    "window_start",
    "is_within_last_days",
    "format_date_display",
    "IdGenerator",
    "encode_data_url",
    "data_url_from_base64",
]
