"""Translation between API payloads and ORM rows.

The ORM mapping is the field table: attribute keys are the snake_case names
used on the wire, column names are the camelCase names used in storage, and
column types drive coercion in both directions. Nothing here is specific to
one resource.
"""

from __future__ import annotations

from datetime import datetime, time
from enum import Enum
from functools import lru_cache
from typing import Any, Iterable, Mapping

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import Enum as SAEnum
from sqlalchemy import inspect
from sqlalchemy.orm import ColumnProperty

from esms.core.resources import Relation, ResourceDefinition, definition_for_model
from esms.services.resource_errors import InvalidFieldError
from esms.utils.datetime_parsing import (
    format_datetime,
    format_time,
    parse_datetime,
    parse_time_of_day,
)

AUDIT_FIELDS = ("created_at", "updated_at")

_INT = TypeAdapter(int)
_FLOAT = TypeAdapter(float)


# =============================================================================
# Column introspection
# =============================================================================


@lru_cache(maxsize=None)
def scalar_properties(model: type) -> tuple[ColumnProperty, ...]:
    """Client-facing scalar columns: everything except keys and audit stamps."""
    props = []
    for prop in inspect(model).column_attrs:
        column = prop.columns[0]
        if prop.key == "id" or prop.key in AUDIT_FIELDS or column.foreign_keys:
            continue
        props.append(prop)
    return tuple(props)


def storage_column_names(model: type) -> dict[str, str]:
    """Map external field names to their storage column names."""
    names = {"id": "id"}
    for prop in inspect(model).column_attrs:
        if prop.key != "id":
            names[prop.key] = prop.columns[0].name
    return names


def relation_target(model: type, relation: Relation) -> type:
    return inspect(model).relationships[relation.name].mapper.class_


def relation_is_many(model: type, relation: Relation) -> bool:
    return bool(inspect(model).relationships[relation.name].uselist)


def display_fields(model: type, relation: Relation) -> tuple[str, ...]:
    if relation.display is not None:
        return relation.display
    target_definition = definition_for_model(relation_target(model, relation))
    if target_definition is not None:
        return target_definition.display
    return ()


def is_blank(value: Any) -> bool:
    """Missing for required-field purposes; 0 and False are present."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


# =============================================================================
# Outbound
# =============================================================================


def serialize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, time):
        return format_time(value)
    if isinstance(value, Enum):
        return value.value
    return value


def related_to_external(target: Any, fields: Iterable[str]) -> dict[str, Any] | None:
    if target is None:
        return None
    data = {"id": target.id}
    for name in fields:
        data[name] = serialize_value(getattr(target, name))
    return data


def to_external(definition: ResourceDefinition, obj: Any) -> dict[str, Any]:
    """Render a row as its API representation."""
    model = definition.model
    data: dict[str, Any] = {"id": obj.id}
    for prop in scalar_properties(model):
        data[prop.key] = serialize_value(getattr(obj, prop.key))

    for relation in definition.relations:
        fields = display_fields(model, relation)
        value = getattr(obj, relation.name)
        if relation_is_many(model, relation):
            data[relation.name] = [
                related_to_external(item, fields)
                for item in sorted(value, key=lambda item: item.id)
            ]
        else:
            data[relation.name] = related_to_external(value, fields)

    data["created_at"] = format_datetime(obj.created_at)
    data["updated_at"] = format_datetime(obj.updated_at)
    return data


# =============================================================================
# Inbound
# =============================================================================


def missing_required(
    definition: ResourceDefinition,
    payload: Mapping[str, Any],
    uploads: Mapping[str, Any] | None = None,
) -> list[str]:
    uploads = uploads or {}
    return [
        name
        for name in definition.required
        if name not in uploads and is_blank(payload.get(name))
    ]


def coerce_value(name: str, column, raw: Any) -> Any:
    """Coerce one inbound value to the column's Python type."""
    column_type = column.type

    if isinstance(column_type, SAEnum) and column_type.enum_class is not None:
        return _coerce_enum(name, column_type.enum_class, raw)

    try:
        python_type = column_type.python_type
    except NotImplementedError:
        return raw

    if python_type is datetime:
        if isinstance(raw, datetime):
            return raw
        parsed = parse_datetime(raw) if isinstance(raw, str) else None
        if parsed is None or parsed.value is None:
            raise InvalidFieldError(name, "expected a date")
        return parsed.value

    if python_type is time:
        if isinstance(raw, time):
            return raw
        value = parse_time_of_day(raw) if isinstance(raw, str) else None
        if value is None:
            raise InvalidFieldError(name, "expected a time (HH:MM)")
        return value

    if python_type is int:
        return _validate(_INT, name, raw, "expected an integer")

    if python_type is float:
        return _validate(_FLOAT, name, raw, "expected a number")

    if python_type is str:
        if isinstance(raw, (dict, list)):
            raise InvalidFieldError(name, "expected text")
        return raw if isinstance(raw, str) else str(raw)

    return raw


def _validate(adapter: TypeAdapter, name: str, raw: Any, detail: str) -> Any:
    if isinstance(raw, bool):
        raise InvalidFieldError(name, detail)
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        return adapter.validate_python(raw)
    except ValidationError:
        raise InvalidFieldError(name, detail) from None


def _coerce_enum(name: str, enum_class: type[Enum], raw: Any) -> Enum:
    if isinstance(raw, enum_class):
        return raw
    if isinstance(raw, str):
        value = raw.strip()
        try:
            return enum_class(value)
        except ValueError:
            pass
        lowered = value.lower()
        for member in enum_class:
            if member.value.lower() == lowered or member.name.lower() == lowered:
                return member
    allowed = ", ".join(member.value for member in enum_class)
    raise InvalidFieldError(name, f"expected one of {allowed}")


def reset_value(column) -> Any:
    """Value an omitted optional field takes on full replace."""
    default = column.default
    if default is None:
        return None
    if default.is_callable:
        return default.arg(None)
    if default.is_scalar:
        return default.arg
    return None


def from_external(
    definition: ResourceDefinition,
    payload: Mapping[str, Any],
    *,
    creating: bool,
) -> dict[str, Any]:
    """
    Coerce the scalar part of a payload into attribute values.

    On create, omitted optional fields are left out so column defaults
    apply. On update (full replace) they are reset. Attachment fields and
    relationships are handled by the caller.
    """
    values: dict[str, Any] = {}
    for prop in scalar_properties(definition.model):
        name = prop.key
        if name in definition.file_fields:
            continue
        raw = payload.get(name)
        if is_blank(raw):
            if not creating:
                values[name] = reset_value(prop.columns[0])
            continue
        values[name] = coerce_value(name, prop.columns[0], raw)
    return values
