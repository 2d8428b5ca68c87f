"""Generic create/read/update/delete for registered resources.

Every operation runs inside the caller's session; the router commits once
at the end, so a failure anywhere (including after a lookup record was
materialized or a file was uploaded) leaves nothing behind.
"""

import logging
from typing import Any, Mapping

from fastapi import UploadFile
from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from esms.core.resources import (
    RESOURCES,
    Relation,
    ResourceDefinition,
    definition_for_model,
    referencing_relationships,
)
from esms.db.base import new_id
from esms.services import storage_service
from esms.services.resource_errors import (
    DuplicateValueError,
    InvalidFieldError,
    MissingFieldsError,
    RelatedResourceNotFoundError,
    ResourceInUseError,
    ResourceNotFoundError,
)
from esms.services.resource_mapping import (
    coerce_value,
    display_fields,
    from_external,
    is_blank,
    missing_required,
    relation_is_many,
    relation_target,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Queries
# =============================================================================


def _load_options(definition: ResourceDefinition) -> list:
    return [selectinload(getattr(definition.model, r.name)) for r in definition.relations]


def _order_clauses(definition: ResourceDefinition) -> list:
    model = definition.model
    clauses = []
    for ordering in definition.order_by:
        descending = ordering.startswith("-")
        column = getattr(model, ordering.lstrip("-"))
        clauses.append(column.desc() if descending else column.asc())
    clauses.append(model.id.asc())
    return clauses


def list_records(
    db: Session,
    definition: ResourceDefinition,
    params: Mapping[str, str] | None = None,
) -> list:
    """List records, applying any declared filters present in ``params``."""
    params = params or {}
    model = definition.model
    stmt = select(model).options(*_load_options(definition))

    for list_filter in definition.filters:
        raw = next(
            (params[name] for name in list_filter.query_names if params.get(name)),
            None,
        )
        if raw is None:
            continue
        try:
            value = list_filter.cast(raw)
        except ValueError:
            raise InvalidFieldError(list_filter.param) from None
        column = getattr(model, list_filter.attr)
        if list_filter.match == "contains":
            stmt = stmt.where(column.ilike(f"%{value}%"))
        else:
            stmt = stmt.where(column == value)

    return list(db.scalars(stmt.order_by(*_order_clauses(definition))).all())


def get_record(db: Session, definition: ResourceDefinition, record_id: str):
    record = db.get(definition.model, record_id, options=_load_options(definition))
    if record is None:
        raise ResourceNotFoundError(f"{definition.title} not found")
    return record


# =============================================================================
# Relationship resolution
# =============================================================================


class _Resolver:
    """Resolves relationship payloads for one operation.

    Remembers lookup records it materialized so a reference repeated within
    the same payload resolves to the same pending row.
    """

    def __init__(self, db: Session, definition: ResourceDefinition):
        self.db = db
        self.definition = definition
        self._created: dict[tuple[type, str, Any], Any] = {}

    def resolve_all(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        model = self.definition.model
        for relation in self.definition.relations:
            if relation.read_only:
                continue
            raw = payload.get(relation.name)
            if relation_is_many(model, relation):
                items = raw if isinstance(raw, list) else ([] if is_blank(raw) else [raw])
                resolved: list = []
                seen: set[str] = set()
                for item in items:
                    if is_blank(item):
                        continue
                    target = self.resolve(relation, item)
                    if target.id not in seen:
                        seen.add(target.id)
                        resolved.append(target)
                values[relation.name] = resolved
            else:
                values[relation.name] = None if is_blank(raw) else self.resolve(relation, raw)
        return values

    def resolve(self, relation: Relation, raw: Any):
        model = self.definition.model
        target_model = relation_target(model, relation)
        fields = display_fields(model, relation)

        if isinstance(raw, Mapping):
            ref_id = raw.get("id")
            ref_id = None if is_blank(ref_id) else str(ref_id).strip()
            attrs = {name: raw[name] for name in fields if not is_blank(raw.get(name))}
        elif isinstance(raw, (str, int)) and not isinstance(raw, bool):
            ref_id = str(raw).strip()
            attrs = {}
        else:
            raise InvalidFieldError(relation.name)

        target = self.db.get(target_model, ref_id) if ref_id else None

        if target is None and relation.lookup_by:
            key = attrs.get(relation.lookup_by, ref_id)
            if key is not None:
                column = getattr(target_model, relation.lookup_by)
                target = self.db.scalars(select(target_model).where(column == key)).first()

        if target is None and relation.resolve_or_create:
            target = self._resolve_or_create(relation, target_model, fields, ref_id, attrs)

        if target is None:
            target_definition = definition_for_model(target_model)
            title = target_definition.title if target_definition else target_model.__name__
            raise RelatedResourceNotFoundError(f"{title} not found")
        return target

    def _resolve_or_create(
        self,
        relation: Relation,
        target_model: type,
        fields: tuple[str, ...],
        ref_id: str | None,
        attrs: dict[str, Any],
    ):
        # Without an id, an existing row with the same display value is reused.
        cache_key = (target_model, "id", ref_id)
        if ref_id is None and fields and fields[0] in attrs:
            cache_key = (target_model, fields[0], attrs[fields[0]])
            column = getattr(target_model, fields[0])
            existing = self.db.scalars(
                select(target_model).where(column == attrs[fields[0]])
            ).first()
            if existing is not None:
                return existing

        if cache_key in self._created:
            return self._created[cache_key]

        target_mapper = inspect(target_model)
        values: dict[str, Any] = {}
        for name, default in relation.defaults.items():
            values[name] = default() if callable(default) else default
        for name, raw in attrs.items():
            if name in target_mapper.column_attrs:
                values[name] = coerce_value(
                    f"{relation.name}.{name}", target_mapper.column_attrs[name].columns[0], raw
                )

        target_definition = definition_for_model(target_model)
        required = target_definition.required if target_definition else fields
        missing = [f"{relation.name}.{name}" for name in required if is_blank(values.get(name))]
        if missing:
            raise MissingFieldsError(missing)

        target = target_model(**values)
        target.id = ref_id or new_id()
        self.db.add(target)
        self._created[cache_key] = target
        logger.info(
            "Created %s %s while resolving %s.%s",
            target_model.__name__,
            target.id,
            self.definition.name,
            relation.name,
        )
        return target


# =============================================================================
# Writes
# =============================================================================


def _check_required(
    definition: ResourceDefinition,
    payload: Mapping[str, Any],
    uploads: Mapping[str, UploadFile],
) -> None:
    missing = missing_required(definition, payload, uploads)
    if missing:
        raise MissingFieldsError(missing)


def _check_uploads(definition: ResourceDefinition, uploads: Mapping[str, UploadFile]) -> None:
    for name, upload in uploads.items():
        if name not in definition.file_fields:
            continue
        try:
            storage_service.check_upload(upload)
        except storage_service.UploadValidationError as exc:
            raise InvalidFieldError(name, str(exc)) from None


def _apply_files(
    db: Session,
    definition: ResourceDefinition,
    record,
    payload: Mapping[str, Any],
    uploads: Mapping[str, UploadFile],
    *,
    creating: bool,
) -> list[str]:
    """Set file fields; returns URLs the record no longer holds."""
    released = []
    for name in definition.file_fields:
        current = None if creating else getattr(record, name)
        if name in uploads:
            new_url = storage_service.store_upload(db, uploads[name])
        else:
            raw = payload.get(name)
            if is_blank(raw):
                new_url = None
            elif isinstance(raw, str):
                new_url = raw.strip()
            else:
                raise InvalidFieldError(name, "expected a file or URL")
        if current and current != new_url:
            released.append(current)
        setattr(record, name, new_url)
    return released


def _file_url_in_use(db: Session, url: str) -> bool:
    for definition in RESOURCES.values():
        model = definition.model
        for name in definition.file_fields:
            stmt = select(model.id).where(getattr(model, name) == url).limit(1)
            if db.scalar(stmt) is not None:
                return True
    return False


def _release_files(db: Session, urls: list[str]) -> None:
    """Schedule deletion of released files no other row still points at.

    Must run after the write is flushed so the check sees the new values.
    """
    for url in dict.fromkeys(urls):
        if _file_url_in_use(db, url):
            logger.info("Keeping shared file %s", url)
            continue
        storage_service.schedule_discard(db, url)


def _unique_values(definition: ResourceDefinition, record) -> dict[str, tuple[Any, Any]]:
    """Business-key columns and the values the record is about to write."""
    model = definition.model
    mapper = inspect(model)
    values: dict[str, tuple[Any, Any]] = {}
    for name in definition.unique:
        if name in mapper.relationships:
            local_column = next(iter(mapper.relationships[name].local_columns))
            attr = mapper.get_property_by_column(local_column).key
            target = getattr(record, name)
            values[name] = (getattr(model, attr), target.id if target is not None else None)
        else:
            values[name] = (getattr(model, name), getattr(record, name))
    return values


def _flush_write(
    db: Session,
    definition: ResourceDefinition,
    record,
    exclude_id: str | None = None,
) -> None:
    unique_values = _unique_values(definition, record)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        model = definition.model
        for name, (column, value) in unique_values.items():
            if value is None:
                continue
            stmt = select(model.id).where(column == value)
            if exclude_id is not None:
                stmt = stmt.where(model.id != exclude_id)
            if db.scalar(stmt.limit(1)) is not None:
                field_label = name.replace("_", " ")
                raise DuplicateValueError(
                    f"A {definition.label} with this {field_label} already exists"
                ) from None
        raise


def create_record(
    db: Session,
    definition: ResourceDefinition,
    payload: Mapping[str, Any],
    uploads: Mapping[str, UploadFile] | None = None,
):
    """Validate, resolve relationships, upload attachments and insert."""
    uploads = uploads or {}
    _check_required(definition, payload, uploads)
    values = from_external(definition, payload, creating=True)
    relations = _Resolver(db, definition).resolve_all(payload)
    _check_uploads(definition, uploads)

    record = definition.model(**values)
    for name, value in relations.items():
        setattr(record, name, value)
    _apply_files(db, definition, record, payload, uploads, creating=True)

    db.add(record)
    _flush_write(db, definition, record)
    logger.info("Created %s %s", definition.name, record.id)
    return record


def update_record(
    db: Session,
    definition: ResourceDefinition,
    record_id: str,
    payload: Mapping[str, Any],
    uploads: Mapping[str, UploadFile] | None = None,
):
    """Full replace: omitted optional fields are cleared, collections replaced."""
    uploads = uploads or {}
    record = get_record(db, definition, record_id)
    _check_required(definition, payload, uploads)
    values = from_external(definition, payload, creating=False)
    relations = _Resolver(db, definition).resolve_all(payload)
    _check_uploads(definition, uploads)

    for name, value in values.items():
        setattr(record, name, value)
    for name, value in relations.items():
        setattr(record, name, value)
    released = _apply_files(db, definition, record, payload, uploads, creating=False)

    _flush_write(db, definition, record, exclude_id=record.id)
    _release_files(db, released)
    logger.info("Updated %s %s", definition.name, record.id)
    return record


def _ensure_not_referenced(db: Session, definition: ResourceDefinition, record) -> None:
    for rel in referencing_relationships(definition.model):
        owner = rel.parent.class_
        attr = getattr(owner, rel.key)
        condition = attr.any(id=record.id) if rel.uselist else attr.has(id=record.id)
        if db.scalar(select(owner.id).where(condition).limit(1)) is None:
            continue
        owner_definition = definition_for_model(owner)
        plural = (
            owner_definition.plural_label
            if owner_definition
            else owner.__tablename__.replace("_", " ")
        )
        raise ResourceInUseError(f"Cannot delete {definition.label} that is in use by {plural}")


def delete_record(db: Session, definition: ResourceDefinition, record_id: str) -> None:
    """Delete unless referenced; attachments are removed once the delete commits."""
    record = get_record(db, definition, record_id)
    _ensure_not_referenced(db, definition, record)
    attachments = [getattr(record, name) for name in definition.file_fields]

    db.delete(record)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ResourceInUseError(
            f"Cannot delete {definition.label} that is in use by other records"
        ) from None

    _release_files(db, [url for url in attachments if url])
    logger.info("Deleted %s %s", definition.name, record_id)
