"""테스트 인프라 — 인메모리 SQLite DB, 세션, 회원 픽스처.

Test infrastructure — In-memory SQLite DB, session, and member fixtures.
Each test gets a fresh in-memory database (aiosqlite + StaticPool);
the schema is created before and dropped after every test.
"""

import os

# 설정 로드 전에 테스트 DB URL 지정 — Must be set before member_search is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AXIOM_API_TOKEN"] = ""
os.environ["AXIOM_DATASET"] = ""

from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from member_search.database import Base
from member_search.models import *  # noqa: F401,F403 — register all models with metadata
from member_search.models import Member, Team
from member_search.repositories.member_repository import member_repository
from member_search.repositories.team_repository import team_repository

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 생성/삭제합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def statements(engine: AsyncEngine) -> Generator[list[str], None, None]:
    """엔진에서 실행된 SQL 문을 기록합니다."""
    recorded: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        recorded.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _record)
    yield recorded
    event.remove(engine.sync_engine, "before_cursor_execute", _record)


def count_queries(recorded: list[str]) -> int:
    """기록된 SQL 중 COUNT 쿼리 수."""
    return sum(1 for s in recorded if "count(" in s.lower())


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB를 생성합니다."""
    result = {}
    for name in ("teamA", "teamB"):
        result[name] = await team_repository.create(db, {"name": name})
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams) -> dict[str, Member]:
    """회원 4명을 생성합니다 — teamA: 10, 20 / teamB: 30, 40."""
    result = {}
    for username, age, team_name in [
        ("member1", 10, "teamA"),
        ("member2", 20, "teamA"),
        ("member3", 30, "teamB"),
        ("member4", 40, "teamB"),
    ]:
        result[username] = await member_repository.create(
            db, {"username": username, "age": age, "team_id": teams[team_name].id}
        )
    return result
