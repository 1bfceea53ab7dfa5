"""
Category persistence.

Ancestor lookups use a recursive CTE over parent_id, so a cycle check is a
single round-trip regardless of tree depth.
"""
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from finance_manager.catalog.db.models import Category
from finance_manager.catalog.schemas.categories import CTFilter
from finance_manager.common.db.repository import BaseRepository


class CategoryRepository(BaseRepository[Category, CTFilter]):
    model = Category

    def _apply_filter(self, stmt: Select, filter_: CTFilter) -> Select:
        if not filter_.include_deleted:
            stmt = stmt.where(Category.is_deleted.is_(False))
        if filter_.registry_holder_id is not None:
            stmt = stmt.where(Category.registry_holder_id == filter_.registry_holder_id)
        if filter_.name_contains:
            stmt = stmt.where(Category.name.icontains(filter_.name_contains))
        if filter_.income is not None:
            stmt = stmt.where(Category.income.is_(filter_.income))
        if filter_.expense is not None:
            stmt = stmt.where(Category.expense.is_(filter_.expense))
        if filter_.parent_id is not None:
            stmt = stmt.where(Category.parent_id == filter_.parent_id)
        return stmt

    def _related_options(self) -> list:
        return [selectinload(Category.registry_holder), selectinload(Category.parent)]

    def _order_by(self) -> list:
        return [Category.name, Category.id]

    async def get_by_registry_holder_id(self, registry_holder_id: UUID, include_related: bool = False) -> Sequence[Category]:
        stmt = select(Category).where(
            Category.registry_holder_id == registry_holder_id,
            Category.is_deleted.is_(False),
            )
        if include_related:
            stmt = stmt.options(*self._related_options())
        result = await self.session.execute(stmt.order_by(*self._order_by()))
        return result.scalars().all()

    async def is_name_unique(
        self,
        name: str,
        registry_holder_id: UUID,
        parent_id: Optional[UUID],
        exclude_id: Optional[UUID] = None,
        ) -> bool:
        """Names are unique among siblings: same holder and same parent (NULL parent = top level)."""
        parent_clause = Category.parent_id.is_(None) if parent_id is None else Category.parent_id == parent_id
        return await self.is_unique(
            Category.name,
            name,
            exclude_id,
            scope=[Category.registry_holder_id == registry_holder_id, parent_clause],
            )

    async def get_ancestor_chain(self, category_id: UUID) -> List[Tuple[UUID, Optional[UUID]]]:
        """
        (id, parent_id) pairs on the parent chain starting at category_id (inclusive).
        An acyclic chain always contains its root, i.e. a pair with parent_id None.

        UNION (not UNION ALL) stops the recursion if the stored chain already
        contains a cycle.
        """
        anchor = select(Category.id, Category.parent_id).where(Category.id == category_id)
        chain = anchor.cte(name="ancestors", recursive=True)
        step = select(Category.id, Category.parent_id).join(chain, Category.id == chain.c.parent_id)
        chain = chain.union(step)

        result = await self.session.execute(select(chain.c.id, chain.c.parent_id))
        return [(row[0], row[1]) for row in result.all()]

    async def has_children(self, category_id: UUID) -> bool:
        return await self._exists_where(Category, Category.parent_id == category_id)

    async def can_be_deleted(self, category_id: UUID) -> bool:
        return not await self.has_children(category_id)
