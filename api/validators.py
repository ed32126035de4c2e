"""Bridge between utils.validation and pydantic field validators."""
from typing import Any, Callable, Optional

from exceptions import ValidationError


def sanitize(validator: Callable[..., Any], value: Any, *args: Any, **kwargs: Any) -> Any:
    """
    Run a validation utility inside a pydantic validator.

    Pydantic only turns ValueError into a 422 response, so our
    ValidationError is re-raised as one.
    """
    try:
        return validator(value, *args, **kwargs)
    except ValidationError as e:
        raise ValueError(str(e)) from e


def sanitize_optional(validator: Callable[..., Any], value: Optional[Any], *args: Any) -> Optional[Any]:
    """Same as sanitize, letting None and empty strings through as None."""
    if value is None or value == "":
        return None
    return sanitize(validator, value, *args)
