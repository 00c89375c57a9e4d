"""Fixed-width field rendering.

Numeric fields are right-justified and zero-filled, alphanumeric fields are
left-justified and space-filled. Nothing that carries money or routing is ever
cut to fit: an oversized value raises ``EncodingInvariantError``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from nachagen.core.exceptions import EncodingInvariantError
from nachagen.nacha.constants import CENTS_ROUNDING, RECORD_SIZE

_ONE = Decimal("1")


def to_cents(amount: Decimal) -> int:
    """Convert a dollar amount to integer cents, rounding half up."""
    return int((Decimal(amount) * 100).quantize(_ONE, rounding=CENTS_ROUNDING))


def numeric(value: int, width: int, field: str = "numeric") -> str:
    text = str(value)
    if value < 0 or len(text) > width:
        raise EncodingInvariantError(field, text, width)
    return text.zfill(width)


def alphanumeric(value: str, width: int, field: str = "alphanumeric", *, truncate: bool = False) -> str:
    text = value or ""
    if len(text) > width:
        if not truncate:
            raise EncodingInvariantError(field, text, width)
        text = text[:width]
    return text.ljust(width)


def hash_field(value: int, width: int = 10) -> str:
    """Render the entry hash keeping only its rightmost ``width`` digits."""
    return str(value % 10**width).zfill(width)


def blank(width: int) -> str:
    return " " * width


def finalize_record(parts: Iterable[str]) -> str:
    """Join record fields and right-pad the line to the record size."""
    line = "".join(parts)
    if len(line) > RECORD_SIZE:
        raise EncodingInvariantError("record", line, RECORD_SIZE)
    return line.ljust(RECORD_SIZE)
