"""
Pydantic building blocks shared by every schema.

Keep wire-format rules here (camelCase keys, strictness, decimal/flag parsing)
so the per-entity schema modules stay declarative.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class APIModel(BaseModel):
    """
    Common base for toolbox schemas:
    - forbid unknown keys (prevents silent typos in payloads)
    - camelCase on the wire, snake_case attribute names in Python
    """

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


def _to_decimal(v: Any) -> Any:
    if isinstance(v, Decimal):
        dec = v
    elif isinstance(v, bool):
        raise PydanticCustomError("decimal_type", "Input should be a decimal number, not a boolean")
    elif isinstance(v, (int, str)):
        try:
            dec = Decimal(str(v).strip())
        except InvalidOperation:
            raise PydanticCustomError("decimal_parsing", "Input should be a valid decimal number") from None
    elif isinstance(v, float):
        # repr() is the shortest text that round-trips, so 0.1 stays 0.1
        dec = Decimal(repr(v))
    else:
        raise PydanticCustomError("decimal_type", "Input should be a decimal number")
    if not dec.is_finite():
        raise PydanticCustomError("finite_number", "Input should be a finite number")
    return dec


def _to_flag(v: Any) -> Any:
    if isinstance(v, bool):
        return v
    if isinstance(v, str) and v.strip().lower() in {"true", "false"}:
        return v.strip().lower() == "true"
    raise PydanticCustomError("bool_type", "Input should be a boolean or 'true'/'false'")


# Exact decimal; accepts Decimal, int, numeric text and (via repr) float.
DecimalValue = Annotated[Decimal, BeforeValidator(_to_decimal)]

# Two-valued flag; accepts bools and the legacy "true"/"false" text.
FlagValue = Annotated[bool, BeforeValidator(_to_flag)]
