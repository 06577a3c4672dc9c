"""
Derive pydantic shapes from SQLAlchemy tables.

Two shapes per table:
  - record_model(): every column, used to serialize rows read back from the DB
  - insert_model(): an explicit allow-list of caller-supplied columns, used to
    validate payloads before a row is built

Column metadata drives both: NOT NULL without a default -> required,
anything else -> optional with the column default. Columns can override the
derived Python type with `info={"schema_type": ...}` (JSON columns mostly).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, create_model
from sqlalchemy import inspect as sa_inspect

from toolbox.schemas.common import APIModel, DecimalValue, FlagValue


class SchemaDefinitionError(Exception):
    """Raised at definition time when a shape references an unknown column."""


@dataclass(frozen=True)
class FieldError:
    field: str  # wire name, dotted for nested values ("tags.0")
    code: str  # missing | invalid_type | unexpected | invalid
    message: str


@dataclass(frozen=True)
class InsertValidation:
    value: BaseModel | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def missing(self) -> list[str]:
        return [e.field for e in self.errors if e.code == "missing"]


class InsertValidationError(ValueError):
    """A payload was rejected by an insert schema; carries the field errors."""

    def __init__(self, schema_name: str, errors: Iterable[FieldError]):
        self.schema_name = schema_name
        self.errors: tuple[FieldError, ...] = tuple(errors)
        summary = "; ".join(f"{e.field}: {e.code}" for e in self.errors[:10])
        super().__init__(f"Invalid {schema_name} payload ({summary})")


class RecordModel(APIModel):
    model_config = ConfigDict(from_attributes=True)


_STRICT_TYPES = {str: StrictStr, int: StrictInt, bool: FlagValue, Decimal: DecimalValue, dict: dict[str, Any]}
_READ_TYPES = {dict: dict[str, Any]}


def _columns(model: type) -> dict[str, Any]:
    mapper = sa_inspect(model)
    return {attr.key: attr.columns[0] for attr in mapper.column_attrs}


def _python_type(column) -> Any:
    override = column.info.get("schema_type")
    if override is not None:
        return override
    try:
        return column.type.python_type
    except NotImplementedError:
        return Any


def _insert_field(column) -> tuple[Any, Any]:
    py = _python_type(column)
    annotation = _STRICT_TYPES.get(py, py) if isinstance(py, type) else py
    default = column.default
    fillable = column.nullable or default is not None or column.server_default is not None
    # null is accepted wherever the column can fill the value itself
    if fillable:
        annotation = Optional[annotation]

    if default is not None and default.is_scalar:
        return annotation, Field(default=default.arg)
    if default is not None and default.is_callable:
        # SQLAlchemy wraps zero-arg callables as fn(ctx)
        return annotation, Field(default_factory=lambda fn=default.arg: fn(None))
    if fillable:
        return annotation, Field(default=None)
    return annotation, Field(...)


def _record_field(column) -> tuple[Any, Any]:
    py = _python_type(column)
    annotation = _READ_TYPES.get(py, py) if isinstance(py, type) else py
    if column.nullable:
        return Optional[annotation], Field(default=None)
    return annotation, Field(...)


def record_model(model: type, name: str | None = None) -> type[RecordModel]:
    """Full read shape of a table: every column, built from ORM attributes."""
    fields = {key: _record_field(col) for key, col in _columns(model).items()}
    return create_model(name or f"{model.__name__}Record", __base__=RecordModel, **fields)


def insert_model(
    model: type,
    fields: Iterable[str],
    name: str | None = None,
    base: type[APIModel] = APIModel,
) -> type[APIModel]:
    """
    Insert shape of a table restricted to `fields` (attribute names).

    Raises SchemaDefinitionError if a name is not a column of `model`.
    """
    columns = _columns(model)
    wanted = list(dict.fromkeys(fields))
    unknown = [f for f in wanted if f not in columns]
    if unknown:
        raise SchemaDefinitionError(f"{model.__name__} has no column(s) {unknown}; known: {sorted(columns)}")
    definitions = {key: _insert_field(columns[key]) for key in wanted}
    return create_model(name or f"{model.__name__}Insert", __base__=base, **definitions)


def _error_code(kind: str) -> str:
    if kind == "missing":
        return "missing"
    if kind == "extra_forbidden":
        return "unexpected"
    if kind.endswith("_type") or kind == "model_attributes_type":
        return "invalid_type"
    return "invalid"


def field_errors(exc: ValidationError) -> list[FieldError]:
    out: list[FieldError] = []
    for err in exc.errors(include_url=False):
        loc = err.get("loc") or ()
        field = ".".join(str(p) for p in loc) if loc else "__root__"
        out.append(FieldError(field=field, code=_error_code(str(err.get("type") or "")), message=str(err.get("msg") or "")))
    return out


def validate_insert(schema: type[BaseModel], payload: Any) -> InsertValidation:
    """
    Check an untyped payload against an insert schema. Pure; never raises for
    bad input. An instance of `schema` is accepted as-is.
    """
    try:
        value = schema.model_validate(payload)
    except ValidationError as exc:
        return InsertValidation(errors=tuple(field_errors(exc)))
    return InsertValidation(value=value)


def insert_fields(schema: type[BaseModel]) -> list[str]:
    return list(schema.model_fields)


def record_fields(model: type) -> list[str]:
    return list(_columns(model))


__all__ = [
    "FieldError",
    "InsertValidation",
    "InsertValidationError",
    "RecordModel",
    "SchemaDefinitionError",
    "field_errors",
    "insert_fields",
    "insert_model",
    "record_fields",
    "record_model",
    "validate_insert",
]

