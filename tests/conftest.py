import os

os.environ.setdefault("ENV", "test")

import httpx
import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

from memo_resources.core import security
from memo_resources.core.security import create_access_token
from memo_resources.database.database import Base, get_db
from memo_resources.database.models.user import User
from memo_resources.database.models.memo import Memo
from memo_resources.database.models.resource import Resource
from memo_resources.main import app


class FakeRedis:

    def __init__(self):
        self.values = {}

    async def setex(self, key, ttl, value):
        self.values[key] = value

    async def exists(self, key):
        return 1 if key in self.values else 0


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(security, "redis_client", fake)
    return fake


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(session):
    """Two users, one memo owned by alice, and resources for both."""
    alice = User(username="alice", nickname="Alice", password_hash="x")
    bob = User(username="bob", nickname="Bob", password_hash="x")
    session.add_all([alice, bob])
    await session.flush()

    memo = Memo(creator_id=alice.id, content="holiday")
    session.add(memo)
    await session.flush()

    photo = Resource(
        creator_id=alice.id,
        created_ts=1700000000,
        filename="a.png",
        type="image/png",
        size=120,
        memo_id=memo.id
    )
    link = Resource(
        creator_id=alice.id,
        created_ts=1700000100,
        filename="doc.pdf",
        external_link="https://example.com/doc.pdf",
        type="application/pdf",
        size=0
    )
    foreign = Resource(
        creator_id=bob.id,
        created_ts=1700000200,
        filename="bob.txt",
        type="text/plain",
        size=3
    )
    session.add_all([photo, link, foreign])
    await session.commit()

    return {
        "alice": alice,
        "bob": bob,
        "memo": memo,
        "photo": photo,
        "link": link,
        "foreign": foreign,
    }


@pytest.fixture
def auth_headers():
    def build(user: User) -> dict:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}
    return build
