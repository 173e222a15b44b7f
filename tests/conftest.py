"""
Test fixtures and configuration for pytest.
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import ideabox.models  # noqa: F401
from ideabox.database import Base, enable_sqlite_foreign_keys, get_db
from ideabox.models.category import Category
from ideabox.models.idea import Idea
from ideabox.models.user import User
from ideabox.routers.auth import COOKIE_KEY, create_access_token


@pytest_asyncio.fixture(scope="function")
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Fresh SQLite database and session for each test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


# ============== Test Data Fixtures ==============


@pytest_asyncio.fixture
async def owner(db_session: AsyncSession) -> User:
    user = User(email="alice@example.com", full_name="Alice Owner")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    user = User(email="bob@example.com", full_name="Bob Other")
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def make_category(db_session: AsyncSession, title: str) -> Category:
    category = Category(title=title)
    db_session.add(category)
    await db_session.commit()
    await db_session.refresh(category)
    return category


async def make_idea(db_session: AsyncSession, description: str, category: Category, owner: User) -> Idea:
    idea = Idea(description=description, category_id=category.id, owner_id=owner.id)
    db_session.add(idea)
    await db_session.commit()
    await db_session.refresh(idea)
    return idea


@pytest_asyncio.fixture
async def category(db_session: AsyncSession) -> Category:
    return await make_category(db_session, "My Category")


@pytest_asyncio.fixture
async def existing_idea(db_session: AsyncSession, category: Category, owner: User) -> Idea:
    return await make_idea(db_session, "Existing Idea", category, owner)


# ============== Client Fixtures ==============


def _signed_in(ac: AsyncClient, user: User) -> AsyncClient:
    ac.cookies.set(COOKIE_KEY, create_access_token({"sub": str(user.id)}))
    return ac


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous test client with the database dependency overridden."""
    from ideabox.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def owner_client(client: AsyncClient, owner: User) -> AsyncClient:
    """Client signed in as the idea owner."""
    return _signed_in(client, owner)


@pytest_asyncio.fixture(scope="function")
async def other_client(db_session: AsyncSession, other_user: User) -> AsyncGenerator[AsyncClient, None]:
    """Second client, signed in as a user who owns nothing."""
    from ideabox.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield _signed_in(ac, other_user)

    app.dependency_overrides.clear()
