"""팀 레포지토리 — 팀 조회 및 생성 쿼리.

Team Repository — Lookup and creation queries for teams.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.models.team import Team
from member_search.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """팀 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Team)

    async def get_by_name(
        self,
        db: AsyncSession,
        name: str,
    ) -> list[Team]:
        """이름이 일치하는 팀 목록을 조회합니다.

        Retrieve every team with the given name. Names are not unique,
        so more than one team may match.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            name: 팀 이름 (Team name)

        Returns:
            list[Team]: 일치하는 팀 목록, ID 오름차순 (Matching teams ordered by id)
        """
        query: Select = select(Team).where(Team.name == name).order_by(Team.id)
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
team_repository: TeamRepository = TeamRepository()
