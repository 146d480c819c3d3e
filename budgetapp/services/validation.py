"""Field parsers shared by the service functions.

Each parser either returns the cleaned value or raises ``ValidationError``
naming the field.
"""
import re
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from ..errors import ValidationError
from ..models.base import CURRENCY_PATTERN

CURRENCY_RE = re.compile(CURRENCY_PATTERN)
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CENTS = Decimal("0.01")
# Numeric(10, 2)
MAX_AMOUNT = Decimal("99999999.99")
# db.Integer
INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1


def required_text(value, field, message=None):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, message or f"{field} is required")
    return value.strip()


def optional_text(value, field):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} must be a string")
    return value.strip() or None


def currency_code(value, field="currency_code"):
    if not isinstance(value, str) or not CURRENCY_RE.fullmatch(value):
        raise ValidationError(
            field, "Currency code must be a valid 3-letter ISO 4217 code (e.g., USD, EUR, GBP)",
        )
    return value


def email_address(value, field="email"):
    if not isinstance(value, str) or not EMAIL_RE.match(value.strip()):
        raise ValidationError(field, "Invalid email format")
    return value.strip().lower()


def amount(value, field, allow_zero=False):
    """Parse a money amount from a JSON number or numeric string."""
    if allow_zero:
        message = f"{field} must be a valid number >= 0"
    else:
        message = f"{field} must be a positive number"
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValidationError(field, message)
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(field, message)
    if not parsed.is_finite() or parsed < 0:
        raise ValidationError(field, message)
    if parsed > MAX_AMOUNT:
        raise ValidationError(field, f"{field} must not exceed {MAX_AMOUNT}")
    parsed = parsed.quantize(CENTS, rounding=ROUND_HALF_UP)
    if parsed < 0 or (parsed == 0 and not allow_zero) or parsed > MAX_AMOUNT:
        raise ValidationError(field, message)
    return parsed


def _as_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def integer(value, field):
    parsed = _as_int(value)
    if parsed is None:
        raise ValidationError(field, f"{field} must be an integer")
    if not INT_MIN <= parsed <= INT_MAX:
        raise ValidationError(field, f"{field} must be between {INT_MIN} and {INT_MAX}")
    return parsed


def identifier(value, field, message=None):
    """A row id from a JSON body: a non-empty string, nothing else."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, message or f"{field} must be a valid id")
    return value.strip()


def iso_date(value, field):
    if value is None or value == "":
        return date.today()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(field, f"{field} must be a date in YYYY-MM-DD format")
