"""
Test infrastructure for the News API.

Strategy
--------
- SQLite in-memory via aiosqlite; StaticPool keeps every task on the one
  connection that holds the in-memory database.
- Foreign keys are switched on for that connection so constraint failures
  behave like they do on PostgreSQL.
- The app's get_db dependency is overridden to use the test session factory.
- Tables are created and seeded with the fixture data below before each
  test and dropped afterwards, so every test starts from the same rows.
"""
from datetime import datetime, timedelta

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from news_api.database import Base, enable_sqlite_foreign_keys, get_db
from news_api.main import app
from news_api.middleware import install_query_counter
from news_api.models import Article, Comment, Topic, User

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

enable_sqlite_foreign_keys(engine_test)
install_query_counter(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixture data
# ---------------------------------------------------------------------------

TOPICS = [
    {"slug": "mitch", "description": "The man, the Mitch, the legend"},
    {"slug": "cats", "description": "Not dogs"},
    {"slug": "paper", "description": "what books are made of"},
]

USERS = [
    {"username": "butter_bridge", "name": "jonny",
     "avatar_url": "https://example.com/avatars/butter_bridge.jpg"},
    {"username": "icellusedkars", "name": "sam",
     "avatar_url": "https://example.com/avatars/icellusedkars.jpg"},
    {"username": "rogersop", "name": "paul",
     "avatar_url": "https://example.com/avatars/rogersop.jpg"},
    {"username": "lurker", "name": "do_nothing",
     "avatar_url": "https://example.com/avatars/lurker.png"},
]

BASE_TIME = datetime(2020, 1, 1, 12, 0, 0)

# Inserted in this order, so article_id is the 1-based list position.
# Creation times are deliberately not monotonic in article_id.
ARTICLES = [
    {"title": "Living in the shadow of a great man", "topic": "mitch",
     "author": "butter_bridge", "body": "I find this existence challenging",
     "votes": 100, "created_at": datetime(2020, 7, 9, 20, 11)},
    {"title": "Sony Vaio; or, The Laptop", "topic": "mitch",
     "author": "icellusedkars", "body": "Call me Mitchell.",
     "votes": 0, "created_at": datetime(2020, 10, 16, 5, 3)},
    {"title": "Eight pug gifs that remind me of mitch", "topic": "mitch",
     "author": "icellusedkars", "body": "some gifs",
     "votes": 0, "created_at": datetime(2020, 11, 3, 9, 12)},
    {"title": "Student SUES Mitch!", "topic": "mitch",
     "author": "rogersop", "body": "We all love Mitch and his wonderful code.",
     "votes": 0, "created_at": datetime(2020, 5, 6, 1, 14)},
    {"title": "UNCOVERED: catspiracy to bring down democracy", "topic": "cats",
     "author": "rogersop", "body": "Bastet walks amongst us, and the cats are taking arms!",
     "votes": 0, "created_at": datetime(2020, 8, 3, 13, 14)},
    {"title": "A", "topic": "mitch",
     "author": "icellusedkars", "body": "Delicious tin of cat food",
     "votes": 0, "created_at": datetime(2020, 10, 18, 1, 0)},
]

# (article_id, author, body, votes, minutes after BASE_TIME)
COMMENTS = [
    (1, "butter_bridge", "Oh, I've got compassion running out of my nose, pal!", 16, 10),
    (1, "icellusedkars", "Replacing the quiet elegance of the dark suit and tie.", 100, 50),
    (1, "icellusedkars", "Lobster pot", 0, 20),
    (1, "butter_bridge", "I hate streaming noses", 0, 70),
    (1, "rogersop", "I carry a log, yes. Is it funny to you?", -100, 40),
    (3, "icellusedkars", "Ambidextrous marsupial", 0, 30),
    (3, "butter_bridge", "git push origin master", 0, 60),
    (5, "rogersop", "What do you see? I have no idea where this will lead us.", 16, 5),
]


@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create and seed all tables before each test, drop after."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_test() as session:
        session.add_all(Topic(**t) for t in TOPICS)
        session.add_all(User(**u) for u in USERS)
        await session.flush()
        session.add_all(Article(**a) for a in ARTICLES)
        await session.flush()
        session.add_all(
            Comment(
                article_id=article_id,
                author=author,
                body=body,
                votes=votes,
                created_at=BASE_TIME + timedelta(minutes=minutes),
            )
            for article_id, author, body, votes, minutes in COMMENTS
        )
        await session.commit()

    yield

    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live AsyncSession for tests that call the service layer directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """An httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
