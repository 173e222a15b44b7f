"""The per-request session contract and SQLite foreign keys."""

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ideabox import database
from ideabox.models.category import Category
from tests.conftest import make_category, make_idea


@pytest.fixture
def request_sessions(db_session, monkeypatch):
    """Point get_db at the per-test database."""
    factory = async_sessionmaker(db_session.bind, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(database, "async_session", factory)
    return factory


async def _category_count(factory) -> int:
    async with factory() as session:
        return (await session.execute(select(func.count(Category.id)))).scalar()


@pytest.mark.asyncio
async def test_get_db_commits_on_clean_exit(request_sessions):
    dependency = database.get_db()
    session = await dependency.__anext__()
    session.add(Category(title="Kept"))
    await session.flush()

    with pytest.raises(StopAsyncIteration):
        await dependency.__anext__()

    assert await _category_count(request_sessions) == 1


@pytest.mark.asyncio
async def test_get_db_rolls_back_when_request_raises(request_sessions):
    dependency = database.get_db()
    session = await dependency.__anext__()
    session.add(Category(title="Discarded"))
    await session.flush()

    with pytest.raises(RuntimeError):
        await dependency.athrow(RuntimeError("handler failed"))

    assert await _category_count(request_sessions) == 0


@pytest.mark.asyncio
async def test_deleting_a_category_cascades_to_its_ideas(db_session, owner):
    category = await make_category(db_session, "Doomed")
    await make_idea(db_session, "Gone with it", category, owner)

    await db_session.execute(text("DELETE FROM categories WHERE id = :id"), {"id": category.id})
    await db_session.commit()

    remaining = (await db_session.execute(text("SELECT COUNT(*) FROM ideas"))).scalar()
    assert remaining == 0
