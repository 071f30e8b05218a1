"""회원 검색 서비스 — 동적 조건 검색 및 페이지네이션 비즈니스 로직.

Member Search Service — Dynamic-condition search and pagination logic.
Composes the search condition into one filter, runs it over the
Member/Team join and assembles pages. The simple page always issues a
count query; the complex page skips it when the first page is already
shorter than the requested size.

The caller owns the session and its transaction scope. Database errors
are propagated unchanged and never turned into partial pages.
"""

import logging
from typing import Any

from sqlalchemy import Row
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.repositories.member_predicates import compose
from member_search.repositories.member_repository import member_repository
from member_search.schemas.member import MemberSearchCondition, MemberTeamDto
from member_search.utils.pagination import Page, PageRequest, ensure_valid_page_request

logger = logging.getLogger(__name__)


class MemberSearchService:
    """회원 검색 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member search business logic.
    Stateless; one instance is shared by all callers.
    """

    def _to_record(self, row: Row[Any]) -> MemberTeamDto:
        """조인 행을 회원-팀 조회 스키마로 변환합니다.

        Convert a joined Member/Team row to a MemberTeamDto.

        Args:
            row: member_id, username, age, team_id, team_name 컬럼을 가진 행
                 (Row with member_id, username, age, team_id, team_name)

        Returns:
            MemberTeamDto: 회원-팀 조회 결과 (Member/team read projection)
        """
        return MemberTeamDto(
            member_id=row.member_id,
            username=row.username,
            age=row.age,
            team_id=row.team_id,
            team_name=row.team_name,
        )

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamDto]:
        """조건에 일치하는 모든 회원을 팀 정보와 함께 조회합니다.

        Search every member matching the condition, joined with its team,
        ordered by member id. An empty condition matches all members.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)

        Returns:
            list[MemberTeamDto]: 검색 결과 (Matching records)
        """
        logger.debug("search condition=%r", condition)
        rows = await member_repository.find_records(db, compose(condition))
        return [self._to_record(r) for r in rows]

    async def search_page_simple(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """조건 검색 결과의 한 페이지와 전체 개수를 조회합니다.

        Fetch one page of matching records and always run the count query,
        so total_count is exact even for pages past the end.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)
            page_request: 페이지 요청 (Offset/limit)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page of records with total count)

        Raises:
            InvalidPageRequest: offset 또는 limit이 음수일 때, 쿼리 실행 전
                                (Negative offset or limit, before any query)
        """
        ensure_valid_page_request(page_request)
        expression = compose(condition)

        rows = await member_repository.find_record_page(db, expression, page_request)
        content: list[MemberTeamDto] = [self._to_record(r) for r in rows]
        total: int = await member_repository.count_records(db, expression)

        logger.debug(
            "search_page_simple condition=%r page=%r content=%d total=%d",
            condition, page_request, len(content), total,
        )
        return self._to_page(content, total, page_request)

    async def search_page_complex(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        """조건 검색 결과의 한 페이지를 조회하고, 필요할 때만 개수를 셉니다.

        Fetch one page of matching records. When the request starts at
        offset 0 and the page came back shorter than the limit, the page
        holds every match and total_count is the content size; the count
        query is skipped. Otherwise the count query runs as in
        search_page_simple.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 회원 검색 조건 (Member search condition)
            page_request: 페이지 요청 (Offset/limit)

        Returns:
            Page[MemberTeamDto]: 페이지 결과 (Page of records with total count)

        Raises:
            InvalidPageRequest: offset 또는 limit이 음수일 때, 쿼리 실행 전
                                (Negative offset or limit, before any query)
        """
        ensure_valid_page_request(page_request)
        expression = compose(condition)

        rows = await member_repository.find_record_page(db, expression, page_request)
        content: list[MemberTeamDto] = [self._to_record(r) for r in rows]

        # 첫 페이지가 덜 찼으면 전체 개수 = 컨텐츠 수 (Short first page holds every match)
        if page_request.offset == 0 and len(content) < page_request.limit:
            total: int = len(content)
            logger.debug("search_page_complex count query skipped, total=%d", total)
        else:
            total = await member_repository.count_records(db, expression)

        logger.debug(
            "search_page_complex condition=%r page=%r content=%d total=%d",
            condition, page_request, len(content), total,
        )
        return self._to_page(content, total, page_request)

    async def count_members(
        self,
        db: AsyncSession,
    ) -> int:
        """전체 회원 수를 조회합니다."""
        return await member_repository.count(db)

    def _to_page(
        self,
        content: list[MemberTeamDto],
        total: int,
        page_request: PageRequest,
    ) -> Page[MemberTeamDto]:
        return Page[MemberTeamDto](
            content=content,
            total_count=total,
            page_index=page_request.page_index,
            page_size=page_request.limit,
        )


# 싱글턴 인스턴스 — Singleton instance
member_search_service: MemberSearchService = MemberSearchService()
