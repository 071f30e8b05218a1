"""회원 레포지토리 — 회원-팀 조인 검색 및 회원 쿼리 모음.

Member Repository — Member/Team join search and member queries.
Extends BaseRepository with the joined record queries used by the
paged search service (list, page slice, count) and a catalogue of
member queries: lookup with an eagerly loaded team, sorting, aggregation,
grouping, inner and outer joins, subqueries, computed projections and
bulk updates.
"""

from typing import Any, Sequence

from sqlalchemy import Row, Select, String, and_, case, cast, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload

from member_search.models.member import Member
from member_search.models.team import Team
from member_search.repositories.base import BaseRepository
from member_search.repositories.member_predicates import FilterExpression, apply_filter
from member_search.schemas.member import MemberAgeStats, MemberDto, TeamAgeStats
from member_search.utils.pagination import PageRequest, count_rows, fetch_slice


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    Record queries select labelled columns so each row carries
    member_id, username, age, team_id and team_name.
    """

    def __init__(self) -> None:
        """MemberRepository를 초기화합니다.

        Initialize the MemberRepository with the Member model.
        """
        super().__init__(Member)

    # --- 회원-팀 조인 검색 (Member/Team join search) ---

    def _record_query(self, expression: FilterExpression) -> Select[Any]:
        """필터가 적용된 회원-팀 조인 쿼리를 생성합니다.

        Build the filtered Member LEFT JOIN Team query without ordering.
        Members without a team are kept, with null team columns.
        """
        query: Select = (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Team, Member.team_id == Team.id)
        )
        return apply_filter(query, expression)

    async def find_records(
        self,
        db: AsyncSession,
        expression: FilterExpression,
    ) -> Sequence[Row[Any]]:
        """필터에 일치하는 모든 회원-팀 행을 조회합니다.

        Retrieve every joined row matching the filter, ordered by member id.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            expression: 필터 식 또는 EMPTY_FILTER (Filter expression or EMPTY_FILTER)

        Returns:
            Sequence[Row[Any]]: 조인 행 목록 (Joined rows)
        """
        query: Select = self._record_query(expression).order_by(Member.id)
        result = await db.execute(query)
        return result.all()

    async def find_record_page(
        self,
        db: AsyncSession,
        expression: FilterExpression,
        page_request: PageRequest,
    ) -> Sequence[Row[Any]]:
        """필터에 일치하는 회원-팀 행 중 한 페이지를 조회합니다.

        Retrieve one page of joined rows. Ordering by member id keeps
        consecutive pages disjoint and stable.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            expression: 필터 식 또는 EMPTY_FILTER (Filter expression or EMPTY_FILTER)
            page_request: 페이지 요청 (Offset/limit)

        Returns:
            Sequence[Row[Any]]: 페이지 행 목록 (Rows of the page)
        """
        query: Select = self._record_query(expression).order_by(Member.id)
        return await fetch_slice(db, query, page_request)

    async def count_records(
        self,
        db: AsyncSession,
        expression: FilterExpression,
    ) -> int:
        """필터에 일치하는 회원-팀 행 수를 조회합니다.

        Count joined rows matching the filter, independent of paging.
        """
        return await count_rows(db, self._record_query(expression))

    # --- 단건/정렬 조회 (Lookup and sorting) ---

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> Member | None:
        """회원 이름으로 단일 회원을 조회합니다.

        Raises:
            MultipleResultsFound: 같은 이름의 회원이 둘 이상일 때
                                  (More than one member has the username)
        """
        result = await db.execute(select(Member).where(Member.username == username))
        return result.scalar_one_or_none()

    async def get_by_username_with_team(
        self,
        db: AsyncSession,
        username: str,
    ) -> Member | None:
        """회원 이름으로 단일 회원을 팀과 함께 조회합니다 (페치 조인).

        Retrieve a member with its team eagerly loaded, so member.team
        can be read without further IO.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 회원 이름 (Username)

        Returns:
            Member | None: 팀이 로드된 회원 또는 None (Member with team loaded, or None)
        """
        query: Select = (
            select(Member)
            .options(selectinload(Member.team))
            .where(Member.username == username)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_sorted_by_age(
        self,
        db: AsyncSession,
        age: int,
    ) -> list[Member]:
        """해당 나이의 회원을 정렬하여 조회합니다.

        Retrieve members of the given age ordered by age descending, then
        username ascending with members without a username last.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            age: 나이 (Age to match)

        Returns:
            list[Member]: 정렬된 회원 목록 (Sorted members)
        """
        query: Select = (
            select(Member)
            .where(Member.age == age)
            .order_by(Member.age.desc(), Member.username.asc().nulls_last(), Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    # --- 집계/그룹 (Aggregation and grouping) ---

    async def get_age_stats(
        self,
        db: AsyncSession,
    ) -> MemberAgeStats:
        """전체 회원 나이 집계를 조회합니다.

        Aggregate count, sum, average, maximum and minimum of member ages.
        """
        query: Select = select(
            func.count(Member.id),
            func.coalesce(func.sum(Member.age), 0),
            func.avg(Member.age),
            func.max(Member.age),
            func.min(Member.age),
        )
        count, total, average, maximum, minimum = (await db.execute(query)).one()
        return MemberAgeStats(
            count=count,
            total=total,
            average=float(average) if average is not None else None,
            maximum=maximum,
            minimum=minimum,
        )

    async def get_team_average_ages(
        self,
        db: AsyncSession,
    ) -> list[TeamAgeStats]:
        """팀 이름별 평균 나이를 조회합니다.

        Average member age per team name, ordered by team name.
        Teams without members do not appear.
        """
        query: Select = (
            select(Team.name, func.avg(Member.age))
            .select_from(Member)
            .join(Team, Member.team_id == Team.id)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        result = await db.execute(query)
        return [
            TeamAgeStats(team_name=name, average_age=float(average))
            for name, average in result.all()
        ]

    # --- 조인 (Joins) ---

    async def get_by_team_name(
        self,
        db: AsyncSession,
        team_name: str,
    ) -> list[Member]:
        """팀 이름으로 소속 회원을 조회합니다 (내부 조인).

        Retrieve members of every team with the given name, ordered by id.
        """
        query: Select = (
            select(Member)
            .join(Team, Member.team_id == Team.id)
            .where(Team.name == team_name)
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_named_after_team(
        self,
        db: AsyncSession,
    ) -> list[Member]:
        """회원 이름이 팀 이름과 같은 회원을 조회합니다 (세타 조인).

        Theta join: members whose username equals some team name,
        regardless of the team they belong to. Ordered by id.
        """
        query: Select = (
            select(Member)
            .join(Team, Member.username == Team.name)
            .order_by(Member.id)
            .distinct()
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_with_team_named(
        self,
        db: AsyncSession,
        team_name: str,
    ) -> list[tuple[Member, Team | None]]:
        """모든 회원을 조회하고, 팀은 이름이 일치할 때만 함께 조회합니다.

        Outer join filtered in the ON clause: every member is returned,
        paired with its team only when that team has the given name.
        Ordered by member id.
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Team, and_(Member.team_id == Team.id, Team.name == team_name))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return [(member, team) for member, team in result.all()]

    async def get_outer_named_after_team(
        self,
        db: AsyncSession,
    ) -> list[tuple[Member, Team | None]]:
        """모든 회원을 조회하고, 회원 이름과 같은 이름의 팀을 함께 조회합니다.

        Outer theta join on username = team name, ordered by member id.
        Members with no matching team are paired with None.
        """
        query: Select = (
            select(Member, Team)
            .outerjoin(Team, Member.username == Team.name)
            .order_by(Member.id, Team.id)
        )
        result = await db.execute(query)
        return [(member, team) for member, team in result.all()]

    # --- 서브쿼리 (Subqueries) ---

    async def get_oldest(
        self,
        db: AsyncSession,
    ) -> list[Member]:
        """나이가 가장 많은 회원을 조회합니다.

        Members whose age equals the maximum age, via a scalar subquery.
        """
        member_sub = aliased(Member, name="member_sub")
        max_age = select(func.max(member_sub.age)).scalar_subquery()
        query: Select = select(Member).where(Member.age == max_age).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_at_least_average_age(
        self,
        db: AsyncSession,
    ) -> list[Member]:
        """나이가 평균 이상인 회원을 조회합니다.

        Members aged at least the average age, via a scalar subquery.
        """
        member_sub = aliased(Member, name="member_sub")
        average_age = select(func.avg(member_sub.age)).scalar_subquery()
        query: Select = select(Member).where(Member.age >= average_age).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_ages_in_older_than(
        self,
        db: AsyncSession,
        age: int,
    ) -> list[Member]:
        """IN 서브쿼리로 주어진 나이보다 많은 회원을 조회합니다.

        Members whose age is in the set of ages greater than ``age``.
        """
        member_sub = aliased(Member, name="member_sub")
        older_ages = select(member_sub.age).where(member_sub.age > age)
        query: Select = select(Member).where(Member.age.in_(older_ages)).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    # --- 프로젝션 (Projections) ---

    async def get_member_dtos(
        self,
        db: AsyncSession,
    ) -> list[MemberDto]:
        """회원 이름/나이만 조회하여 DTO로 변환합니다."""
        query: Select = select(Member.username, Member.age).order_by(Member.id)
        result = await db.execute(query)
        return [MemberDto(username=username, age=age) for username, age in result.all()]

    async def get_age_labels(
        self,
        db: AsyncSession,
    ) -> list[str]:
        """CASE 식으로 나이를 라벨로 변환합니다 (10 → 열살, 20 → 스무살, 그 외 → 기타)."""
        label = case(
            (Member.age == 10, "열살"),
            (Member.age == 20, "스무살"),
            else_="기타",
        )
        result = await db.execute(select(label).order_by(Member.id))
        return list(result.scalars().all())

    async def get_username_age_labels(
        self,
        db: AsyncSession,
    ) -> list[str]:
        """회원 이름과 나이를 ``username_age`` 형태로 이어 붙여 조회합니다."""
        label = Member.username + "_" + cast(Member.age, String)
        result = await db.execute(select(label).order_by(Member.id))
        return list(result.scalars().all())

    async def get_lowercase_usernames(
        self,
        db: AsyncSession,
    ) -> list[str]:
        """이름이 이미 소문자인 회원의 이름을 조회합니다."""
        query: Select = (
            select(Member.username)
            .where(Member.username == func.lower(Member.username))
            .order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    # --- 벌크 연산 (Bulk operations) ---

    async def bulk_rename_younger_than(
        self,
        db: AsyncSession,
        age: int,
        username: str,
    ) -> int:
        """지정 나이 미만 회원의 이름을 일괄 변경합니다.

        Bulk-update the username of every member younger than age.
        Loaded instances are expired so later reads see the new state.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            age: 기준 나이, 미만 (Exclusive age bound)
            username: 새 회원 이름 (New username)

        Returns:
            int: 변경된 행 수 (Number of updated rows)
        """
        result = await db.execute(
            update(Member).where(Member.age < age).values(username=username)
        )
        db.expire_all()
        return result.rowcount

    async def bulk_add_age(
        self,
        db: AsyncSession,
        delta: int,
    ) -> int:
        """모든 회원의 나이에 delta를 더합니다.

        Returns:
            int: 변경된 행 수 (Number of updated rows)
        """
        result = await db.execute(update(Member).values(age=Member.age + delta))
        db.expire_all()
        return result.rowcount

    async def bulk_delete_younger_than(
        self,
        db: AsyncSession,
        age: int,
    ) -> int:
        """지정 나이 미만 회원을 일괄 삭제합니다.

        Returns:
            int: 삭제된 행 수 (Number of deleted rows)
        """
        result = await db.execute(delete(Member).where(Member.age < age))
        db.expire_all()
        return result.rowcount


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
