"""Generic repository base and query utilities for SQLAlchemy 2.x.

Persistence-only concerns shared by all repositories:

- Pagination value objects and a counting paginator.
- Safe sorting through a per-repository whitelist, with a primary-key
  tiebreaker so pages are deterministic.
- Update helpers restricted to a per-repository whitelist of fields.

Repositories never commit or roll back; the Unit of Work owns transactions.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from pressroom.core.extensions import db

E = TypeVar("E")


@dataclass(slots=True)
class Pagination:
    """Pagination input: 1-based ``page``, page size ``limit``, public sort tokens."""

    page: int
    limit: int
    sort: list[str]


@dataclass(slots=True)
class Page(Generic[E]):
    """Result page with metadata."""

    items: Sequence[E]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        """Number of pages for ``total`` rows (at least 0)."""
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Parse tokens like ``["-created_at", "title"]`` into ``(field, is_desc)`` tuples."""
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        name = (token[1:] if is_desc else token).strip()
        if name:
            parsed.append((name, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply whitelisted ``ORDER BY`` clauses; unknown tokens are ignored.

    The primary key is always appended as the final ascending tiebreaker.
    """
    orders = [
        col.desc() if is_desc else col.asc()
        for name, is_desc in parse_sort_tokens(tokens)
        if (col := sortable_fields.get(name)) is not None
    ]
    if orders:
        stmt = stmt.order_by(*orders)
    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())
    return stmt


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
) -> tuple[list[Any], int]:
    """Execute ``stmt`` for one page and return ``(items, total)``.

    ``ORDER BY`` is stripped from the count query.
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = int(session.execute(count_stmt).scalar_one())
    rows = session.execute(stmt.limit(limit).offset((page - 1) * limit)).unique()
    return list(rows.scalars().all()), total


class BaseRepository(Generic[E]):
    """Persistence-only repository for a single aggregate.

    Subclasses set ``model`` and may override ``_sortable_fields``,
    ``_updatable_fields`` and ``_default_eagerload``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so defaults and constraints apply now."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).unique().scalars().first())

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def assign_updates(self, instance: E, fields: Mapping[str, Any]) -> E:
        """Assign whitelisted keys via ``setattr`` (so ``@validates`` runs) and flush.

        :raises ValueError: On keys outside ``_updatable_fields()``.
        """
        allowed = self._updatable_fields()
        unknown = sorted(k for k in fields if k not in allowed)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            setattr(instance, key, value)
        self.flush()
        return instance

    # ------------------------------- Listing ---------------------------------

    def paginate(self, pagination: Pagination, *, where: Iterable[Any] = ()) -> Page[E]:
        """Page through rows matching the ``where`` clauses with stable ordering."""
        stmt: Select[Any] = select(self.model)
        for clause in where:
            stmt = stmt.where(clause)
        stmt = self._default_eagerload(stmt)
        stmt = apply_sorting(
            stmt, self._sortable_fields(), pagination.sort, pk_attr=self._pk_attr()
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(items=cast(list[E], items), total=total, page=pagination.page, limit=pagination.limit)
