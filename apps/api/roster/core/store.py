"""
Entity store: the persistence interface the mutation protocol talks to.

Every method opens its own session and commits before returning, so single-row
operations are atomic and nothing is shared across calls. SQLAlchemy failures
leave this module as ``StoreError`` (or one of its subclasses) so callers never
depend on driver-specific exception types.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

M = TypeVar("M", bound=SQLModel)


class StoreError(Exception):
    """Store-level failure not caused by a constraint."""


class UniqueViolation(StoreError):
    pass


class ForeignKeyViolation(StoreError):
    pass


def _wrap(exc: SQLAlchemyError) -> StoreError:
    msg = str(getattr(exc, "orig", None) or exc)
    if isinstance(exc, IntegrityError):
        low = msg.lower()
        if "unique" in low or "duplicate" in low:
            return UniqueViolation(msg)
        if "foreign key" in low:
            return ForeignKeyViolation(msg)
    return StoreError(msg)


def _where(model: Type[M], filters: Optional[Mapping[str, Any]]) -> List[Any]:
    out: List[Any] = []
    for name, value in (filters or {}).items():
        col = getattr(model, name)
        if isinstance(value, (list, tuple, set, frozenset)):
            out.append(col.in_(list(value)))
        else:
            out.append(col == value)
    return out


class Store:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    # --- reads ---
    def find_by_id(self, model: Type[M], row_id: int) -> Optional[M]:
        try:
            with self._session() as s:
                return s.get(model, row_id)
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def find_many(
        self,
        model: Type[M],
        filters: Optional[Mapping[str, Any]] = None,
        *,
        clauses: Sequence[Any] = (),
        joins: Sequence[Type[SQLModel]] = (),
        order_by: Sequence[Any] = (),
    ) -> List[M]:
        stmt = select(model)
        for j in joins:
            stmt = stmt.join(j)
        conds = _where(model, filters) + list(clauses)
        if conds:
            stmt = stmt.where(*conds)
        if order_by:
            stmt = stmt.order_by(*order_by)
        try:
            with self._session() as s:
                return list(s.exec(stmt).all())
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def find_first(
        self,
        model: Type[M],
        filters: Mapping[str, Any],
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[M]:
        conds = _where(model, filters)
        if exclude_id is not None:
            conds.append(getattr(model, "id") != exclude_id)
        stmt = select(model).where(*conds).limit(1)
        try:
            with self._session() as s:
                return s.exec(stmt).first()
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def count(self, model: Type[M], filters: Mapping[str, Any]) -> int:
        stmt = select(func.count()).select_from(model).where(*_where(model, filters))
        try:
            with self._session() as s:
                return int(s.exec(stmt).one())
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    # --- writes ---
    def create(self, model: Type[M], data: Mapping[str, Any]) -> M:
        obj = model(**dict(data))
        try:
            with self._session() as s:
                s.add(obj)
                s.commit()
                s.refresh(obj)
                return obj
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def update(self, model: Type[M], row_id: int, data: Mapping[str, Any]) -> Optional[M]:
        try:
            with self._session() as s:
                obj = s.get(model, row_id)
                if obj is None:
                    return None
                for k, v in data.items():
                    setattr(obj, k, v)
                s.add(obj)
                s.commit()
                s.refresh(obj)
                return obj
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def delete(self, model: Type[M], row_id: int) -> bool:
        try:
            with self._session() as s:
                obj = s.get(model, row_id)
                if obj is None:
                    return False
                s.delete(obj)
                s.commit()
                return True
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def delete_many(self, model: Type[M], filters: Mapping[str, Any]) -> int:
        try:
            with self._session() as s:
                rows = s.exec(select(model).where(*_where(model, filters))).all()
                for r in rows:
                    s.delete(r)
                s.commit()
                return len(rows)
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def delete_cascade(
        self,
        model: Type[M],
        row_id: int,
        children: Sequence[Tuple[Type[SQLModel], Mapping[str, Any]]] = (),
    ) -> Optional[List[int]]:
        """
        Delete matching child rows and then the row itself in one transaction.

        Returns the number of rows removed per child entry, or None when the
        row does not exist. Any failure rolls back the children too.
        """
        try:
            with self._session() as s:
                obj = s.get(model, row_id)
                if obj is None:
                    return None
                removed: List[int] = []
                for child, filters in children:
                    rows = s.exec(select(child).where(*_where(child, filters))).all()
                    for r in rows:
                        s.delete(r)
                    removed.append(len(rows))
                s.flush()
                s.delete(obj)
                s.commit()
                return removed
        except SQLAlchemyError as e:
            raise _wrap(e) from e

    def create_many(
        self,
        model: Type[M],
        rows: Iterable[Mapping[str, Any]],
        *,
        skip_duplicates: bool = False,
    ) -> List[M]:
        """
        Insert many rows.

        Without skip_duplicates the batch is one transaction and any collision
        aborts all of it. With skip_duplicates each row commits on its own and
        rows that hit a unique constraint are dropped from the result.
        """
        items = [dict(r) for r in rows]
        if skip_duplicates:
            created: List[M] = []
            for data in items:
                try:
                    created.append(self.create(model, data))
                except UniqueViolation:
                    continue
            return created

        objs = [model(**data) for data in items]
        try:
            with self._session() as s:
                s.add_all(objs)
                s.commit()
                for obj in objs:
                    s.refresh(obj)
                return objs
        except SQLAlchemyError as e:
            raise _wrap(e) from e
