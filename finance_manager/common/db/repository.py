"""
Generic repository base.

One subclass per entity supplies:
- model: the SQLModel table class
- _apply_filter(): entity-specific WHERE clauses for get_paged()
- _related_options(): loader options used when include_related=True

Design Notes:
- Repositories never commit: services own the unit of work and call
  session.commit() once, after every check has passed
- Soft-deleted rows are hidden from get_paged() unless the filter asks
  for them; get_by_id() always returns them so services can decide
- is_unique() compares case-insensitively through lower()
"""
from typing import Any, Generic, Optional, Sequence, Type, TypeVar
from uuid import UUID

from sqlalchemy import exists, func, select, Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.util import identity_key
from sqlmodel import SQLModel

from finance_manager.common.schemas.pagination import PaginationFilter

ModelT = TypeVar("ModelT", bound=SQLModel)
FilterT = TypeVar("FilterT", bound=PaginationFilter)


class BaseRepository(Generic[ModelT, FilterT]):
    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    # =========================================================================
    # HOOKS
    # =========================================================================

    def _apply_filter(self, stmt: Select, filter_: FilterT) -> Select:
        return stmt

    def _related_options(self) -> list:
        return []

    def _order_by(self) -> list:
        return [self.model.created_at, self.model.id]

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(
        self,
        entity_id: UUID,
        include_related: bool = True,
        disable_tracking: bool = False,
        ) -> Optional[ModelT]:
        """
        Load one entity by primary key.

        Args:
            entity_id: Primary key
            include_related: Eager-load relationships declared in _related_options()
            disable_tracking: Return a detached instance (read-only use). An entity
                already tracked by the session stays tracked.
        """
        already_tracked = identity_key(self.model, entity_id) in self.session.identity_map

        stmt = select(self.model).where(self.model.id == entity_id)
        if include_related:
            stmt = stmt.options(*self._related_options())

        result = await self.session.execute(stmt)
        entity = result.scalar_one_or_none()

        if entity is not None and disable_tracking and not already_tracked:
            self.session.expunge(entity)
        return entity

    async def get_paged(self, filter_: FilterT, include_related: bool = False) -> Sequence[ModelT]:
        stmt = self._apply_filter(select(self.model), filter_)
        if include_related:
            stmt = stmt.options(*self._related_options())
        stmt = stmt.order_by(*self._order_by()).offset(filter_.skip).limit(filter_.take)

        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def count(self, filter_: FilterT) -> int:
        stmt = self._apply_filter(select(func.count()).select_from(self.model), filter_)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def get_all(self) -> Sequence[ModelT]:
        result = await self.session.execute(select(self.model).order_by(*self._order_by()))
        return result.scalars().all()

    async def any(self, entity_id: Optional[UUID] = None) -> bool:
        """True if the entity exists (or, without an id, if the table has any row)."""
        stmt = select(self.model.id)
        if entity_id is not None:
            stmt = stmt.where(self.model.id == entity_id)
        result = await self.session.execute(select(exists(stmt)))
        return bool(result.scalar())

    async def is_empty(self) -> bool:
        return not await self.any()

    async def is_unique(
        self,
        column: Any,
        value: str,
        exclude_id: Optional[UUID] = None,
        scope: Sequence[Any] = (),
        ) -> bool:
        """
        True if no other row has `column` equal to `value` (case-insensitive).

        Args:
            column: Model column compared through lower()
            value: Candidate value
            exclude_id: Row to ignore (the one being updated)
            scope: Extra WHERE clauses narrowing the comparison (e.g. holder/parent)
        """
        stmt = select(self.model.id).where(func.lower(column) == value.lower(), *scope)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await self.session.execute(select(exists(stmt)))
        return not result.scalar()

    async def _exists_where(self, model: Type[SQLModel], *criteria: Any) -> bool:
        """Existence check against another table (used by can_be_deleted checks)."""
        result = await self.session.execute(select(exists(select(model.id).where(*criteria))))
        return bool(result.scalar())

    # =========================================================================
    # WRITE OPERATIONS (no commit)
    # =========================================================================

    async def add(self, entity: ModelT) -> ModelT:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def add_range(self, entities: Sequence[ModelT]) -> None:
        self.session.add_all(list(entities))
        await self.session.flush()

    def update(self, entity: ModelT) -> ModelT:
        """Attach an entity to the session (no-op for tracked instances)."""
        self.session.add(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def delete_by_id(self, entity_id: UUID) -> bool:
        """Delete by id; returns False if nothing was found."""
        entity = await self.session.get(self.model, entity_id)
        if entity is None:
            return False
        await self.delete(entity)
        return True
