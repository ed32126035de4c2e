"""Validation utilities for API input sanitization.

The store accepts whatever it is given; these checks run at the HTTP
boundary before anything reaches it.
"""
import re
from typing import Optional

from exceptions import ValidationError
from constants import MIN_PHONE_DIGITS, MAX_PHONE_DIGITS


def validate_truck_number(truck_number: str) -> str:
    """
    Validate and normalize an Indian vehicle registration number.

    Format: state code (2 letters) + RTO code (1-2 digits) + series
    (0-3 letters) + number (1-4 digits), e.g. MH-12-AB-1234.

    Args:
        truck_number: Registration number to validate

    Returns:
        Normalized number, uppercase and dash separated

    Raises:
        ValidationError: If the number is not a registration number
    """
    if not truck_number:
        raise ValidationError("Truck number cannot be empty")

    compact = re.sub(r'[\s-]', '', truck_number.upper())

    match = re.match(r'^([A-Z]{2})(\d{1,2})([A-Z]{0,3})(\d{1,4})$', compact)
    if not match:
        raise ValidationError(
            f"Truck number must look like MH-12-AB-1234: {truck_number}"
        )

    return "-".join(part for part in match.groups() if part)


def validate_pan_card(pan: str) -> str:
    """
    Validate PAN format: 5 letters, 4 digits, 1 letter (ABCDE1234F).

    Args:
        pan: PAN to validate

    Returns:
        Normalized PAN (uppercase, trimmed)

    Raises:
        ValidationError: If PAN is invalid
    """
    if not pan:
        raise ValidationError("PAN cannot be empty")

    normalized = pan.upper().strip()

    if not re.match(r'^[A-Z]{5}\d{4}[A-Z]$', normalized):
        raise ValidationError(f"Invalid PAN format: {pan}")

    return normalized


def validate_ifsc_code(ifsc: str) -> str:
    """
    Validate IFSC format: 4 letter bank code, a zero, 6 character branch code.

    Args:
        ifsc: IFSC code to validate

    Returns:
        Normalized IFSC code

    Raises:
        ValidationError: If IFSC code is invalid
    """
    if not ifsc:
        raise ValidationError("IFSC code cannot be empty")

    normalized = ifsc.upper().strip()

    if not re.match(r'^[A-Z]{4}0[A-Z0-9]{6}$', normalized):
        raise ValidationError(f"Invalid IFSC code: {ifsc}")

    return normalized


def validate_phone_number(phone: str) -> str:
    """
    Validate and normalize a phone number.

    Keeps a leading '+' and the digits; separators are dropped.

    Args:
        phone: Phone number to validate

    Returns:
        Normalized phone number

    Raises:
        ValidationError: If phone number is invalid
    """
    if not phone:
        raise ValidationError("Phone number cannot be empty")

    stripped = phone.strip()
    digits = re.sub(r'\D', '', stripped)

    if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
        raise ValidationError(
            f"Phone number must have {MIN_PHONE_DIGITS}-{MAX_PHONE_DIGITS} digits, "
            f"got {len(digits)}: {phone}"
        )

    return f"+{digits}" if stripped.startswith("+") else digits


def validate_amount(
    amount: float,
    field_name: str = "Amount",
    allow_zero: bool = True
) -> float:
    """
    Validate a money amount.

    Args:
        amount: Amount to validate
        field_name: Name of field for error message
        allow_zero: Whether to allow zero values

    Returns:
        Validated amount

    Raises:
        ValidationError: If amount is invalid
    """
    if amount is None:
        raise ValidationError(f"{field_name} cannot be None")

    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError(f"{field_name} must be a number, got {type(amount)}")

    if allow_zero:
        if amount < 0:
            raise ValidationError(f"{field_name} must be non-negative, got {amount}")
    else:
        if amount <= 0:
            raise ValidationError(f"{field_name} must be positive, got {amount}")

    return float(amount)


def validate_required_string(
    value: Optional[str],
    field_name: str,
    max_length: Optional[int] = None
) -> str:
    """
    Validate required string field.

    Args:
        value: String value to validate
        field_name: Name of field for error message
        max_length: Maximum allowed length

    Returns:
        Validated string (stripped)

    Raises:
        ValidationError: If string is invalid
    """
    if not value:
        raise ValidationError(f"{field_name} is required")

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string, got {type(value)}")

    stripped = value.strip()

    if not stripped:
        raise ValidationError(f"{field_name} cannot be empty or whitespace")

    if max_length and len(stripped) > max_length:
        raise ValidationError(
            f"{field_name} must be at most {max_length} characters, "
            f"got {len(stripped)}"
        )

    return stripped
