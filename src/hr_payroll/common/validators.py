from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def _whole_number(value: Any) -> int:
    """Like ``int(value)`` but refuses bools and fractional numbers instead of truncating them."""

    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(value)
    if isinstance(value, Decimal) and (not value.is_finite() or value != value.to_integral_value()):
        raise ValueError(value)
    return int(value)


def require_id(value: Any, field_name: str) -> int:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required", field=field_name)
    try:
        ident = _whole_number(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number", field=field_name)
    if ident <= 0:
        raise ValidationError(f"{field_name} is required", field=field_name)
    return ident


def require_month(value: Any, field_name: str = "month") -> int:
    try:
        month = _whole_number(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number between 1 and 12", field=field_name)
    if not 1 <= month <= 12:
        raise ValidationError(f"{field_name} must be between 1 and 12", field=field_name)
    return month


def require_year(value: Any, field_name: str = "year") -> int:
    try:
        year = _whole_number(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive number", field=field_name)
    if year <= 0:
        raise ValidationError(f"{field_name} must be a positive number", field=field_name)
    return year


def require_money(value: Any, field_name: str, *, places: Optional[int] = 2) -> Decimal:
    """Parse a non-negative amount into Decimal.

    Floats go through ``str`` so 0.1 stays 0.1 instead of its binary expansion.
    ``places`` caps the fractional digits (None = unlimited, e.g. for rates).
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required", field=field_name)
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} is not a valid amount", field=field_name)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} is not a valid amount", field=field_name)
    if not amount.is_finite():
        raise ValidationError(f"{field_name} is not a valid amount", field=field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative", field=field_name)
    if places is not None and amount.as_tuple().exponent < -places:
        raise ValidationError(f"{field_name} cannot have more than {places} decimal places", field=field_name)
    return amount
