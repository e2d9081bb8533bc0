"""
Validated mutation protocol, shared by every roster resource.

A resource is described once by a ``Resource`` table (schemas, unique field
sets, foreign keys, dependents, includes). ``MutationProtocol`` then runs the
same single-pass pipeline for all of them:

    CREATE  validate -> unique -> references -> insert -> expand
    READ    parse id -> fetch (+ includes) -> 404
    UPDATE  parse id -> validate -> fetch -> unique (excluding self) -> references -> apply present fields
    DELETE  parse id -> fetch -> blocking dependents -> cascading dependents + delete (one transaction)
    BULK    parent exists -> child refs exist (all missing reported) -> skip existing -> insert new

Every step fails fast and nothing is written before the last check passes.
"""
from __future__ import annotations

import functools
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Type

import pydantic
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel

from roster.core.errors import (
    DependencyConflictError,
    DuplicateError,
    InvalidIdError,
    InvalidReferenceError,
    NotFoundError,
    RosterError,
    UnexpectedStoreError,
    ValidationError,
    pydantic_error_details,
)
from roster.core.logging import emit
from roster.core.schemas import MAX_ID
from roster.core.store import ForeignKeyViolation, Store, StoreError, UniqueViolation


@dataclass(frozen=True)
class UniqueRule:
    fields: Tuple[str, ...]
    message: str


@dataclass(frozen=True)
class Reference:
    field: str
    model: Type[SQLModel]
    label: str

    @property
    def message(self) -> str:
        return f"The specified {self.label} does not exist"


@dataclass(frozen=True)
class Dependent:
    model: Type[SQLModel]
    field: str
    relation: str
    cascade: bool = False


@dataclass(frozen=True)
class Include:
    """One related table joined into a response; ``many`` means children pointing back at the row."""

    key: str
    model: Type[SQLModel]
    field: str
    many: bool = False
    nested: Tuple["Include", ...] = ()
    order_by: Tuple[str, ...] = ()


def _describe_default(_store: Store, row: SQLModel) -> Dict[str, Any]:
    out = {"id": row.id}
    if hasattr(row, "name"):
        out["name"] = row.name
    return out


@dataclass(frozen=True)
class Resource:
    name: str
    label: str
    model: Type[SQLModel]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    unique: Tuple[UniqueRule, ...] = ()
    references: Tuple[Reference, ...] = ()
    dependents: Tuple[Dependent, ...] = ()
    duplicate_message: str = ""
    describe: Callable[[Store, Any], Dict[str, Any]] = field(default=_describe_default)

    def reference(self, field_name: str) -> Reference:
        for ref in self.references:
            if ref.field == field_name:
                return ref
        raise KeyError(field_name)


# --- helpers ---
def parse_id(raw: Any, label: str = "Resource") -> int:
    """Positive integer ids only; anything else is InvalidIdError, never NotFoundError."""
    if isinstance(raw, bool):
        raise InvalidIdError(f"{label} ID must be a positive integer", {"value": raw})
    if isinstance(raw, int):
        value = raw
    else:
        s = str(raw).strip()
        # isdigit() alone lets through non-ASCII digits such as "²"
        if not (s.isascii() and s.isdigit()):
            raise InvalidIdError(f"{label} ID must be a positive integer", {"value": raw})
        value = int(s)
    if value <= 0 or value > MAX_ID:
        raise InvalidIdError(f"{label} ID must be a positive integer", {"value": raw})
    return value


def validate(schema: Type[BaseModel], payload: Any) -> BaseModel:
    if isinstance(payload, schema):
        return payload
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid input data", pydantic_error_details(e.errors())) from e


def to_wire(row: SQLModel) -> Dict[str, Any]:
    return {to_camel(k): v for k, v in row.model_dump().items()}


def expand(store: Store, row: SQLModel, includes: Sequence[Include]) -> Dict[str, Any]:
    out = to_wire(row)
    for inc in includes:
        if inc.many:
            order = [getattr(inc.model, c) for c in inc.order_by]
            children = store.find_many(inc.model, {inc.field: row.id}, order_by=order)
            out[inc.key] = [expand(store, c, inc.nested) for c in children]
        else:
            fk = getattr(row, inc.field)
            parent = store.find_by_id(inc.model, fk) if fk is not None else None
            out[inc.key] = expand(store, parent, inc.nested) if parent is not None else None
    return out


def _logged(action: str):
    def deco(fn):
        @functools.wraps(fn)
        def wrapper(self: "MutationProtocol", *args: Any, **kwargs: Any):
            try:
                return fn(self, *args, **kwargs)
            except UnexpectedStoreError as e:
                emit("error", f"{self.resource.name}.failed", e.message, module=__name__, action=action)
                raise
            except RosterError as e:
                emit(
                    "warning",
                    f"{self.resource.name}.rejected",
                    e.message,
                    module=__name__,
                    action=action,
                    error=e.error,
                )
                raise

        return wrapper

    return deco


class MutationProtocol:
    def __init__(self, store: Store, resource: Resource) -> None:
        self.store = store
        self.resource = resource

    @contextmanager
    def _store_errors(self, on_foreign_key: Type[RosterError] = InvalidReferenceError) -> Iterator[None]:
        r = self.resource
        try:
            yield
        except UniqueViolation as e:
            raise DuplicateError(r.duplicate_message or f"{r.label} already exists") from e
        except ForeignKeyViolation as e:
            if on_foreign_key is DependencyConflictError:
                raise DependencyConflictError(f"Cannot delete {r.name} because it has associated records") from e
            raise on_foreign_key(f"{r.label} references a row that does not exist") from e
        except StoreError as e:
            raise UnexpectedStoreError(str(e)) from e

    def _fetch(self, row_id: int) -> SQLModel:
        with self._store_errors():
            row = self.store.find_by_id(self.resource.model, row_id)
        if row is None:
            raise NotFoundError(f"{self.resource.label} with ID {row_id} does not exist", {"id": row_id})
        return row

    def _check_unique(self, values: Mapping[str, Any], exclude_id: Optional[int] = None) -> None:
        for rule in self.resource.unique:
            key = {f: values.get(f) for f in rule.fields}
            if any(v is None for v in key.values()):
                continue
            with self._store_errors():
                clash = self.store.find_first(self.resource.model, key, exclude_id=exclude_id)
            if clash is not None:
                raise DuplicateError(rule.message, {"fields": [to_camel(f) for f in rule.fields]})

    def _check_reference(self, ref: Reference, value: Any) -> None:
        with self._store_errors():
            parent = self.store.find_by_id(ref.model, value)
        if parent is None:
            raise InvalidReferenceError(ref.message, {"field": to_camel(ref.field), "id": value})

    # --- operations ---
    def list(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        clauses: Sequence[Any] = (),
        joins: Sequence[Type[SQLModel]] = (),
        order_by: Sequence[Any] = (),
        includes: Sequence[Include] = (),
    ) -> List[Dict[str, Any]]:
        with self._store_errors():
            rows = self.store.find_many(
                self.resource.model, filters, clauses=clauses, joins=joins, order_by=order_by
            )
            return [expand(self.store, r, includes) for r in rows]

    @_logged("read")
    def read(self, raw_id: Any, includes: Sequence[Include] = ()) -> Dict[str, Any]:
        row_id = parse_id(raw_id, self.resource.label)
        row = self._fetch(row_id)
        with self._store_errors():
            return expand(self.store, row, includes)

    @_logged("create")
    def create(self, payload: Any, includes: Sequence[Include] = ()) -> Dict[str, Any]:
        r = self.resource
        data = validate(r.create_schema, payload).model_dump()

        self._check_unique(data)
        for ref in r.references:
            self._check_reference(ref, data[ref.field])

        with self._store_errors():
            row = self.store.create(r.model, data)
            out = expand(self.store, row, includes)
        emit("info", f"{r.name}.created", f"{r.label} {row.id} created", module=__name__, id=row.id)
        return out

    @_logged("update")
    def update(self, raw_id: Any, payload: Any, includes: Sequence[Include] = ()) -> Dict[str, Any]:
        r = self.resource
        row_id = parse_id(raw_id, r.label)
        data = validate(r.update_schema, payload).model_dump(exclude_unset=True)
        existing = self._fetch(row_id)

        touched = [rule for rule in r.unique if any(f in data for f in rule.fields)]
        if touched:
            merged = {**existing.model_dump(), **data}
            for rule in touched:
                key = {f: merged.get(f) for f in rule.fields}
                with self._store_errors():
                    clash = self.store.find_first(r.model, key, exclude_id=row_id)
                if clash is not None:
                    raise DuplicateError(rule.message, {"fields": [to_camel(f) for f in rule.fields]})

        for ref in r.references:
            if ref.field in data:
                self._check_reference(ref, data[ref.field])

        with self._store_errors():
            if data:
                row = self.store.update(r.model, row_id, data)
                if row is None:
                    raise NotFoundError(f"{r.label} with ID {row_id} does not exist", {"id": row_id})
            else:
                row = existing
            out = expand(self.store, row, includes)
        emit(
            "info",
            f"{r.name}.updated",
            f"{r.label} {row_id} updated",
            module=__name__,
            id=row_id,
            fields=sorted(to_camel(k) for k in data),
        )
        return out

    @_logged("delete")
    def delete(self, raw_id: Any) -> Dict[str, Any]:
        r = self.resource
        row_id = parse_id(raw_id, r.label)
        row = self._fetch(row_id)

        for dep in r.dependents:
            if dep.cascade:
                continue
            with self._store_errors():
                n = self.store.count(dep.model, {dep.field: row_id})
            if n > 0:
                raise DependencyConflictError(
                    f"Cannot delete {r.name} because it has {n} associated {dep.relation}",
                    {"relation": dep.relation, "count": n},
                )

        cascades = [dep for dep in r.dependents if dep.cascade]
        with self._store_errors(on_foreign_key=DependencyConflictError):
            echo = r.describe(self.store, row)
            removed = self.store.delete_cascade(
                r.model, row_id, [(dep.model, {dep.field: row_id}) for dep in cascades]
            )
        if removed is None:
            raise NotFoundError(f"{r.label} with ID {row_id} does not exist", {"id": row_id})
        for dep, n in zip(cascades, removed):
            if n:
                emit("info", f"{r.name}.cascade", f"removed {n} {dep.relation}", module=__name__, id=row_id, count=n)
        emit("info", f"{r.name}.deleted", f"{r.label} {row_id} deleted", module=__name__, id=row_id)
        return echo

    @_logged("bulk_create")
    def bulk_create(
        self,
        parent: Reference,
        parent_id: int,
        rows: Sequence[Mapping[str, Any]],
        *,
        child: Optional[Reference] = None,
        includes: Sequence[Include] = (),
    ) -> Dict[str, Any]:
        """
        Create many rows under one parent.

        Rows whose unique key already exists (in the store or earlier in the same
        request) are skipped, not rejected. Request-internal repeats do not count
        toward ``total``.
        """
        r = self.resource
        self._check_reference(parent, parent_id)

        if child is not None:
            wanted: List[Any] = []
            for row in rows:
                if row[child.field] not in wanted:
                    wanted.append(row[child.field])
            with self._store_errors():
                found = {c.id for c in self.store.find_many(child.model, {"id": wanted})}
            missing = [i for i in wanted if i not in found]
            if missing:
                raise InvalidReferenceError(
                    f"The following {child.label} IDs do not exist: {', '.join(str(i) for i in missing)}",
                    {"field": to_camel(child.field), "missingIds": missing},
                )

        with self._store_errors():
            existing = self.store.find_many(r.model, {parent.field: parent_id})
        in_store = {rule: {tuple(getattr(e, f) for f in rule.fields) for e in existing} for rule in r.unique}
        in_batch: Dict[UniqueRule, set] = {rule: set() for rule in r.unique}

        pending: List[Dict[str, Any]] = []
        skipped = 0
        for row in rows:
            data = {**row, parent.field: parent_id}
            keys = {rule: tuple(data.get(f) for f in rule.fields) for rule in r.unique}
            if any(keys[rule] in in_batch[rule] for rule in r.unique):
                continue
            for rule in r.unique:
                in_batch[rule].add(keys[rule])
            if any(keys[rule] in in_store[rule] for rule in r.unique):
                skipped += 1
                continue
            pending.append(data)

        with self._store_errors():
            created = self.store.create_many(r.model, pending, skip_duplicates=True)
            items = [expand(self.store, c, includes) for c in created]
        # rows that lost an insert race to another request
        skipped += len(pending) - len(created)

        summary = {"created": len(created), "skipped": skipped, "total": len(created) + skipped}
        emit("info", f"{r.name}.bulk_created", f"{r.label} bulk create", module=__name__, parent_id=parent_id, **summary)
        return {**summary, "items": items}
