"""
tests/conftest.py
Shared fixtures: in-memory SQLite database, HTTP client bound to the app,
seeded accounts and a fake media host.
"""

import os

# Must be set before config.settings is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["REDIS_URL"] = ""
os.environ["APP_ENV"] = "test"

from typing import List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config.database import Base, get_db
from main import app
from shared.models.models import User, UserRole, UserStatus
from shared.utils.media import MediaStorage, MediaStorageError, StoredImage, get_media_storage
from shared.utils.security import create_access_token, hash_password

TEST_PASSWORD = "secret123"

# One bcrypt round per session keeps the suite fast
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


class FakeMediaStorage(MediaStorage):
    """Records uploads/deletes instead of calling the media host."""

    def __init__(self, fail: bool = False):
        super().__init__(cloud_name="test", api_key="key", api_secret="secret")
        self.fail = fail
        self.uploads: List[dict] = []
        self.deleted: List[str] = []

    async def upload(self, content, filename, content_type, folder) -> StoredImage:
        if self.fail:
            raise MediaStorageError("media host down")
        n = len(self.uploads) + 1
        self.uploads.append({"filename": filename, "folder": folder, "size": len(content)})
        public_id = f"{folder}/img{n}"
        return StoredImage(
            url=f"https://res.cloudinary.com/test/image/upload/v1/{public_id}.jpg",
            public_id=public_id,
        )

    async def delete(self, public_id: str) -> None:
        self.deleted.append(public_id)


def auth_headers(user: User) -> dict:
    token = create_access_token(
        user_id=user.id,
        role=user.role.value,
        status=user.status.value,
        email=user.email,
    )
    return {"Authorization": f"Bearer {token}"}


def image_file(name: str = "photo.jpg", content: bytes = b"\xff\xd8\xff fake jpeg") -> dict:
    """Multipart payload for the `image` upload field."""
    return {"image": (name, content, "image/jpeg")}


# ── Database ──────────────────────────────────────────────────

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def media() -> FakeMediaStorage:
    return FakeMediaStorage()


@pytest_asyncio.fixture
async def client(session_factory, media):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_storage] = lambda: media

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test/api") as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Accounts ──────────────────────────────────────────────────

async def make_user(
    db: AsyncSession,
    email: str,
    role: UserRole = UserRole.USER,
    status: UserStatus = UserStatus.APPROVED,
    password_hash: Optional[str] = None,
) -> User:
    user = User(
        email=email,
        password_hash=password_hash or _PASSWORD_HASH,
        role=role,
        status=status,
    )
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    return await make_user(db, "admin@example.com", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def user(db: AsyncSession) -> User:
    return await make_user(db, "member@example.com")


@pytest_asyncio.fixture
async def pending_user(db: AsyncSession) -> User:
    return await make_user(db, "pending@example.com", status=UserStatus.PENDING)


@pytest_asyncio.fixture
async def blocked_user(db: AsyncSession) -> User:
    return await make_user(db, "blocked@example.com", status=UserStatus.BLOCKED)
