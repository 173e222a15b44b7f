"""
Idea & Category persistence.

Thin async helpers over ``AsyncSession``. They flush but never commit;
the calling router owns the transaction.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ideabox.errors import (
    CategoryNotFoundError,
    CategoryValidationError,
    IdeaNotFoundError,
    IdeaValidationError,
)
from ideabox.models.category import Category
from ideabox.models.idea import Idea
from ideabox.models.user import User
from ideabox.schemas.idea import IdeaDraft, usable_id
from ideabox.services.validation import IDEA_FIELDS_REQUIRED, validate_idea

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
#  Categories
# ═══════════════════════════════════════════════════════════════

async def list_categories(db: AsyncSession) -> Sequence[Category]:
    result = await db.execute(select(Category).order_by(Category.title))
    return result.scalars().all()


async def find_category(db: AsyncSession, category_id: int) -> Category:
    if usable_id(category_id) is None:
        raise CategoryNotFoundError(category_id)
    result = await db.execute(select(Category).where(Category.id == category_id))
    category = result.scalar_one_or_none()
    if not category:
        raise CategoryNotFoundError(category_id)
    return category


async def create_category(db: AsyncSession, title: Optional[str]) -> Category:
    """Create a category; titles are required and unique."""
    title = (title or "").strip()
    if not title:
        raise CategoryValidationError("Title must be present")

    existing = await db.execute(select(Category.id).where(Category.title == title))
    if existing.scalar_one_or_none() is not None:
        raise CategoryValidationError(f"Category '{title}' already exists")

    category = Category(title=title)
    db.add(category)
    await db.flush()
    await db.refresh(category)
    logger.info("Created category %s (%s)", category.id, category.title)
    return category


# ═══════════════════════════════════════════════════════════════
#  Ideas
# ═══════════════════════════════════════════════════════════════

async def find_idea(db: AsyncSession, idea_id: int) -> Idea:
    if usable_id(idea_id) is None:
        raise IdeaNotFoundError(idea_id)
    result = await db.execute(select(Idea).where(Idea.id == idea_id))
    idea = result.scalar_one_or_none()
    if not idea:
        raise IdeaNotFoundError(idea_id)
    return idea


async def list_ideas_for_owner(
    db: AsyncSession,
    owner: Optional[User],
    category_id: Optional[int] = None,
) -> List[Idea]:
    """Ideas visible to ``owner``: their own, newest first. Anonymous sees none."""
    if owner is None:
        return []
    query = (
        select(Idea)
        .options(selectinload(Idea.category))
        .where(Idea.owner_id == owner.id)
        .order_by(Idea.created_at.desc(), Idea.id.desc())
    )
    if category_id is not None:
        query = query.where(Idea.category_id == category_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def _resolve_category(db: AsyncSession, draft: IdeaDraft) -> Category:
    """Validate the draft and load its category; a dangling id counts as blank."""
    validate_idea(draft)
    try:
        return await find_category(db, draft.category_id)
    except CategoryNotFoundError:
        raise IdeaValidationError(IDEA_FIELDS_REQUIRED)


async def create_idea(db: AsyncSession, owner: User, draft: IdeaDraft) -> Idea:
    category = await _resolve_category(db, draft)

    idea = Idea(
        description=draft.description.strip(),
        category_id=category.id,
        owner_id=owner.id,
    )
    db.add(idea)
    await db.flush()
    await db.refresh(idea)
    logger.info("User %s created idea %s in category %s", owner.id, idea.id, category.id)
    return idea


async def update_idea(db: AsyncSession, idea: Idea, draft: IdeaDraft) -> Idea:
    """Apply a validated draft. The owner is never touched."""
    category = await _resolve_category(db, draft)

    idea.description = draft.description.strip()
    idea.category_id = category.id
    await db.flush()
    await db.refresh(idea)
    logger.info("Updated idea %s (category %s)", idea.id, idea.category_id)
    return idea


async def delete_idea(db: AsyncSession, idea: Idea) -> None:
    idea_id = idea.id
    await db.delete(idea)
    await db.flush()
    logger.info("Deleted idea %s", idea_id)
