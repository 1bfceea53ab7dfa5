"""
Category service.

Design Notes:
- Names are unique among siblings: same registry holder and same parent
- Assigning a parent walks the proposed parent's ancestor chain; the
  assignment is rejected if the chain reaches the category itself or never
  reaches a root (an already-cyclic chain)
- A category with child categories cannot be soft- or hard-deleted
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finance_manager.catalog.db.models import Category
from finance_manager.catalog.errors import CategoryErrors
from finance_manager.catalog.repositories.categories import CategoryRepository
from finance_manager.catalog.repositories.registry_holders import RegistryHolderRepository
from finance_manager.catalog.schemas.categories import CTCreateItem, CTFilter, CTReadItem, CTUpdateItem
from finance_manager.common.errors import AppError
from finance_manager.common.logging_config import get_logger
from finance_manager.common.result import Result

logger = get_logger(__name__)


class CategoryService:

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = CategoryRepository(session)
        self.holders = RegistryHolderRepository(session)

    async def _check_parent(self, category_ref, parent_id: UUID, category_id: Optional[UUID] = None) -> Optional[AppError]:
        """
        Validate a proposed parent.

        Args:
            category_ref: Identifier used in the error message (id, or name for a new category)
            parent_id: Proposed parent
            category_id: Id of the category being re-parented (None on create)
        """
        if not await self.repository.any(parent_id):
            return CategoryErrors.parent_not_found(parent_id)

        chain = await self.repository.get_ancestor_chain(parent_id)
        ancestor_ids = {node_id for node_id, _ in chain}
        reaches_root = any(node_parent is None for _, node_parent in chain)

        if (category_id is not None and category_id in ancestor_ids) or not reaches_root:
            return CategoryErrors.recursive_parent(category_ref, parent_id)
        return None

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, category_id: UUID, include_related: bool = True) -> Result[CTReadItem]:
        category = await self.repository.get_by_id(category_id, include_related=include_related, disable_tracking=True)
        if category is None:
            return Result.fail(CategoryErrors.not_found(category_id))
        return Result.ok(CTReadItem.from_entity(category, include_related))

    async def get_paged(self, filter_: CTFilter) -> Result[List[CTReadItem]]:
        categories = await self.repository.get_paged(filter_)
        return Result.ok([CTReadItem.from_entity(c) for c in categories])

    async def get_by_registry_holder_id(self, registry_holder_id: UUID, include_related: bool = False) -> Result[List[CTReadItem]]:
        if not await self.holders.any(registry_holder_id):
            return Result.fail(CategoryErrors.registry_holder_not_found(registry_holder_id))
        categories = await self.repository.get_by_registry_holder_id(registry_holder_id, include_related)
        return Result.ok([CTReadItem.from_entity(c, include_related) for c in categories])

    # =========================================================================
    # CREATE / UPDATE
    # =========================================================================

    async def create(self, item: CTCreateItem) -> Result[CTReadItem]:
        if not item.name:
            return Result.fail(CategoryErrors.name_required())
        if not await self.holders.any(item.registry_holder_id):
            return Result.fail(CategoryErrors.registry_holder_not_found(item.registry_holder_id))

        if item.parent_id is not None:
            error = await self._check_parent(item.name, item.parent_id)
            if error is not None:
                return Result.fail(error)

        if not await self.repository.is_name_unique(item.name, item.registry_holder_id, item.parent_id):
            return Result.fail(CategoryErrors.name_already_exists(item.name))

        category = await self.repository.add(Category(
            registry_holder_id=item.registry_holder_id,
            name=item.name,
            income=item.income,
            expense=item.expense,
            emoji=item.emoji,
            icon=item.icon,
            parent_id=item.parent_id,
            ))
        await self.session.commit()

        logger.info("Category created", id=str(category.id), name=category.name, parent_id=str(category.parent_id))
        return Result.ok(CTReadItem.from_entity(category))

    async def update(self, item: CTUpdateItem) -> Result[CTReadItem]:
        category = await self.repository.get_by_id(item.id, include_related=False)
        if category is None:
            return Result.fail(CategoryErrors.not_found(item.id))

        changes: dict = {}

        new_parent_id = category.parent_id
        if item.detach_parent:
            new_parent_id = None
        elif item.parent_id is not None:
            new_parent_id = item.parent_id

        if new_parent_id != category.parent_id:
            if new_parent_id is not None:
                error = await self._check_parent(category.id, new_parent_id, category_id=category.id)
                if error is not None:
                    return Result.fail(error)
            changes["parent_id"] = new_parent_id

        new_name = category.name
        if item.name is not None and item.name != category.name:
            if not item.name:
                return Result.fail(CategoryErrors.name_required())
            new_name = item.name
            changes["name"] = new_name

        if "name" in changes or "parent_id" in changes:
            if not await self.repository.is_name_unique(
                new_name, category.registry_holder_id, new_parent_id, exclude_id=category.id
                ):
                return Result.fail(CategoryErrors.name_already_exists(new_name))

        for field in ("income", "expense", "emoji", "icon"):
            value = getattr(item, field)
            if value is not None and value != getattr(category, field):
                changes[field] = value

        if changes:
            for field, value in changes.items():
                setattr(category, field, value)
            await self.session.commit()
            logger.info("Category updated", id=str(category.id), fields=sorted(changes))

        return Result.ok(CTReadItem.from_entity(category))

    # =========================================================================
    # SOFT DELETE / RESTORE / DELETE
    # =========================================================================

    async def soft_delete(self, category_id: UUID) -> Result[None]:
        category = await self.repository.get_by_id(category_id, include_related=False)
        if category is None:
            return Result.fail(CategoryErrors.not_found(category_id))
        if category.is_deleted:
            return Result.ok()
        if await self.repository.has_children(category_id):
            return Result.fail(CategoryErrors.in_use(category_id))

        category.mark_as_deleted()
        await self.session.commit()
        logger.info("Category soft deleted", id=str(category_id))
        return Result.ok()

    async def restore(self, category_id: UUID) -> Result[None]:
        category = await self.repository.get_by_id(category_id, include_related=False)
        if category is None:
            return Result.fail(CategoryErrors.not_found(category_id))
        if not category.is_deleted:
            return Result.ok()

        category.restore()
        await self.session.commit()
        logger.info("Category restored", id=str(category_id))
        return Result.ok()

    async def delete(self, category_id: UUID) -> Result[None]:
        category = await self.repository.get_by_id(category_id, include_related=False)
        if category is None:
            return Result.fail(CategoryErrors.not_found(category_id))
        if not await self.repository.can_be_deleted(category_id):
            return Result.fail(CategoryErrors.in_use(category_id))

        await self.repository.delete(category)
        await self.session.commit()
        logger.info("Category deleted", id=str(category_id))
        return Result.ok()
