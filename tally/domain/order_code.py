"""Short, shareable order codes.

A code is ``YY-XXXX``: the last two digits of the year, a dash, and the
last eight hex digits of the order id written in base 36. No counter is
kept, so the code can be derived again from the id at any time.
"""

import re
import uuid
from datetime import date

from tally.core.exceptions import ValidationError

ORDER_CODE_PATTERN = re.compile(r"^\d{2}-[0-9A-Z]+$")
_HEX_TAIL = re.compile(r"^[0-9a-fA-F]+$")

_BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_HEX_TAIL_LENGTH = 8


def to_base36(number: int) -> str:
    """Render a non-negative integer in upper-case base 36."""
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_order_code(order_id: str | None = None, today: date | None = None) -> str:
    """Generate the short code for an order.

    Args:
        order_id: Order identifier, typically a UUID. When omitted a random
            UUID stands in for it (bulk import creates the code before the
            order exists).
        today: Date supplying the year; defaults to the current date.

    Returns:
        Code such as "25-9P7C"

    Raises:
        ValidationError: If the identifier tail is not hexadecimal
    """
    if order_id is None:
        order_id = uuid.uuid4().hex
    today = today or date.today()

    year_str = f"{today.year % 100:02d}"
    hex_tail = order_id.replace("-", "")[-_HEX_TAIL_LENGTH:]
    if not _HEX_TAIL.match(hex_tail):
        raise ValidationError(f"Order id '{order_id}' does not end in hex digits")

    return f"{year_str}-{to_base36(int(hex_tail, 16))}"


def normalize_order_code(text: str) -> str:
    """Trim and upper-case a code typed by a user."""
    return text.strip().upper()


def is_valid_order_code(code: str) -> bool:
    return bool(ORDER_CODE_PATTERN.match(code))
