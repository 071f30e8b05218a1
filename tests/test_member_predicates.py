"""회원 검색 조건 조합기 테스트.

Member predicate composer tests — per-field clauses, AND folding with
absent operands, fixed clause order, and equivalence against the
reference members when run as a query.
"""

import pytest
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.models import Member, Team
from member_search.repositories.member_predicates import (
    EMPTY_FILTER,
    age_eq,
    age_goe,
    age_loe,
    all_eq,
    and_all,
    apply_filter,
    compose,
    team_name_eq,
    username_eq,
)
from member_search.schemas.member import MemberSearchCondition


async def _usernames(db: AsyncSession, expression) -> list[str]:
    query = apply_filter(
        select(Member.username)
        .select_from(Member)
        .outerjoin(Team, Member.team_id == Team.id)
        .order_by(Member.id),
        expression,
    )
    return list((await db.execute(query)).scalars().all())


class TestFieldClauses:
    """필드별 조건 테스트."""

    def test_absent_fields_produce_no_clause(self):
        """값이 없으면 조건도 없음."""
        assert username_eq(None) is None
        assert team_name_eq(None) is None
        assert age_goe(None) is None
        assert age_loe(None) is None
        assert age_eq(None) is None

    def test_zero_age_is_a_real_value(self):
        """나이 0은 조건을 생성."""
        clause = age_goe(0)
        assert clause is not None
        assert str(clause) == str(Member.age >= 0)

    def test_clause_shapes(self):
        """각 조건의 SQL 형태."""
        assert str(username_eq("member1")) == "members.username = :username_1"
        assert str(team_name_eq("teamA")) == "teams.name = :name_1"
        assert str(age_goe(20)) == "members.age >= :age_1"
        assert str(age_loe(30)) == "members.age <= :age_1"


class TestCompose:
    """조건 조합 테스트."""

    def test_empty_condition_returns_empty_filter(self):
        """모든 필드가 비면 빈 필터."""
        condition = MemberSearchCondition()
        assert condition.is_empty()
        assert compose(condition) is EMPTY_FILTER

    def test_single_field_is_that_clause(self):
        """필드 하나만 설정하면 해당 조건 그대로."""
        expression = compose(MemberSearchCondition(username="member1"))
        assert str(expression) == str(username_eq("member1"))

    def test_fixed_clause_order(self):
        """조건은 이름, 팀, 나이 하한, 나이 상한 순서로 결합."""
        expression = compose(MemberSearchCondition(
            age_loe=40, age_goe=10, team_name="teamA", username="member1",
        ))
        sql = str(expression)
        positions = [
            sql.index("members.username ="),
            sql.index("teams.name ="),
            sql.index("members.age >="),
            sql.index("members.age <="),
        ]
        assert positions == sorted(positions)
        assert sql.count(" AND ") == 3

    def test_condition_is_immutable(self):
        """검색 조건은 생성 후 변경 불가."""
        condition = MemberSearchCondition(username="member1")
        with pytest.raises(ValidationError):
            condition.username = "member2"

    @pytest.mark.parametrize("field, value", [
        ("age_goe", True),
        ("age_loe", False),
        ("age_goe", "20"),
        ("age_loe", 30.0),
        ("username", 1),
        ("team_name", b"teamA"),
    ])
    def test_condition_rejects_coercible_values(self, field, value):
        """bool, 숫자 문자열 등 타입이 다른 값은 변환 없이 거부."""
        with pytest.raises(ValidationError):
            MemberSearchCondition(**{field: value})


class TestAndAll:
    """AND 결합 테스트."""

    def test_no_clauses(self):
        """조건이 없으면 빈 필터."""
        assert and_all() is EMPTY_FILTER
        assert and_all(None, None) is EMPTY_FILTER

    def test_absent_left_operand(self):
        """왼쪽 조건이 없어도 실패하지 않음."""
        expression = and_all(None, age_eq(10))
        assert str(expression) == str(age_eq(10))

    def test_all_eq_with_missing_username(self):
        """이름 없이 나이만 지정한 all_eq."""
        assert str(all_eq(None, 10)) == str(age_eq(10))
        assert all_eq(None, None) is EMPTY_FILTER

    def test_all_eq_with_both(self):
        """이름과 나이 모두 지정한 all_eq."""
        sql = str(all_eq("member1", 10))
        assert "members.username = " in sql
        assert "members.age = " in sql
        assert " AND " in sql


class TestFilterAgainstData:
    """조합된 필터를 실제 데이터에 적용하는 테스트."""

    async def test_empty_filter_matches_all(self, db: AsyncSession, members):
        """빈 필터는 전체 회원 조회."""
        assert await _usernames(db, compose(MemberSearchCondition())) == [
            "member1", "member2", "member3", "member4",
        ]

    async def test_single_username(self, db: AsyncSession, members):
        """이름 조건만으로 조회 (동적 쿼리)."""
        assert await _usernames(db, all_eq("member1", None)) == ["member1"]

    async def test_username_and_age(self, db: AsyncSession, members):
        """이름과 나이가 모두 일치해야 조회."""
        assert await _usernames(db, all_eq("member1", 10)) == ["member1"]
        assert await _usernames(db, all_eq("member1", 20)) == []

    async def test_team_name(self, db: AsyncSession, members):
        """팀 이름 조건."""
        expression = compose(MemberSearchCondition(team_name="teamB"))
        assert await _usernames(db, expression) == ["member3", "member4"]

    async def test_age_range(self, db: AsyncSession, members):
        """나이 범위 조건."""
        expression = compose(MemberSearchCondition(age_goe=20, age_loe=30))
        assert await _usernames(db, expression) == ["member2", "member3"]

    async def test_single_field_equivalence(self, db: AsyncSession, members):
        """필드 하나짜리 조건은 해당 단일 조건과 같은 결과."""
        cases = [
            (MemberSearchCondition(username="member2"), username_eq("member2")),
            (MemberSearchCondition(team_name="teamA"), team_name_eq("teamA")),
            (MemberSearchCondition(age_goe=25), age_goe(25)),
            (MemberSearchCondition(age_loe=25), age_loe(25)),
        ]
        for condition, clause in cases:
            assert await _usernames(db, compose(condition)) == await _usernames(db, clause)
