"""
Column types that keep a text representation in the database.

- TextBoolean: real bools in Python, "true"/"false" in the column
- DecimalText: Decimal in Python, exact decimal text in the column
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


TRUE_TEXT = "true"
FALSE_TEXT = "false"


class TextBoolean(TypeDecorator):
    impl = Text
    cache_ok = True

    @property
    def python_type(self):
        return bool

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, bool):
            return TRUE_TEXT if value else FALSE_TEXT
        if isinstance(value, str) and value.strip().lower() in {TRUE_TEXT, FALSE_TEXT}:
            return value.strip().lower()
        raise ValueError(f"Expected a boolean, got {value!r}")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return str(value).strip().lower() == TRUE_TEXT


class DecimalText(TypeDecorator):
    impl = Text
    cache_ok = True

    @property
    def python_type(self):
        return Decimal

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, bool) or isinstance(value, float):
            raise ValueError(f"Expected Decimal/int/str for an exact decimal column, got {value!r}")
        try:
            dec = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Invalid decimal: {value!r}") from None
        if not dec.is_finite():
            raise ValueError(f"Decimal must be finite: {value!r}")
        return str(dec)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)
