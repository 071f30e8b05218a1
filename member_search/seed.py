"""초기 데이터 시드 스크립트 — 팀과 회원 생성.

Seed script — Creates the reference teams and members.
Run this script once to bootstrap the database with sample data.

Usage:
    python -m member_search.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 4명 회원: member1(10), member2(20) → teamA, member3(30), member4(40) → teamB
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from member_search.database import async_session, engine, Base
from member_search.models import Member, Team
from member_search.repositories.member_repository import member_repository
from member_search.repositories.team_repository import team_repository
from member_search.utils.axiom_logging import setup_logging

logger = logging.getLogger(__name__)

# (팀 이름, [(회원 이름, 나이), ...]) — (team name, [(username, age), ...])
SEED_DATA: list[tuple[str, list[tuple[str, int]]]] = [
    ("teamA", [("member1", 10), ("member2", 20)]),
    ("teamB", [("member3", 30), ("member4", 40)]),
]


async def seed_members(db: AsyncSession) -> bool:
    """세션에 시드 팀과 회원을 추가합니다.

    Insert the seed teams and members in the given session without
    committing. Skips when any member already exists.

    Returns:
        bool: 시드 수행 여부 (Whether rows were inserted)
    """
    if await member_repository.count(db) > 0:
        return False

    for team_name, members in SEED_DATA:
        team: Team = await team_repository.create(db, {"name": team_name})
        for username, age in members:
            db.add(Member(username=username, age=age, team_id=team.id))
    await db.flush()
    return True


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the sample teams
    and members.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if not await seed_members(db):
            logger.info("Already seeded. Skipping.")
            return
        await db.commit()
        logger.info("Seeded %d members", await member_repository.count(db))


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
