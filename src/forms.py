"""Parsing of query-string and form values into typed values."""

import math
import re

from errors import ValidationError

# Optional sign and ASCII digits only; whitespace, underscores and other
# Unicode digits are rejected.
_INT_PATTERN = re.compile(r'[+-]?[0-9]+')

INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


def parse_int64(value):
    """Parse a decimal integer that fits a signed 64-bit column, else None."""
    if value is None or not _INT_PATTERN.fullmatch(value):
        return None
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return number


def parse_positive_int(value, default):
    """Parse ``value`` as an integer >= 1, falling back to ``default``."""
    number = parse_int64(value)
    if number is None or number < 1:
        return default
    return number


def parse_product_id(value):
    product_id = parse_int64(value)
    if product_id is None:
        raise ValidationError("Invalid product ID")
    return product_id


def parse_price(value):
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid price") from None
    if not math.isfinite(price):
        raise ValidationError("Invalid price")
    return price


def parse_product_form(form):
    """Read the name, size and price fields of a product form.

    All three are required. Values are kept as submitted; the price has to
    parse as a finite number.
    """
    values = {}
    for field in ('name', 'size', 'price'):
        value = form.get(field) or ''
        if not value.strip():
            raise ValidationError(f"Missing field: {field}")
        values[field] = value

    return values['name'], values['size'], parse_price(values['price'])
