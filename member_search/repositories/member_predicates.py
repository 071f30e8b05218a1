"""회원 검색 조건 조합기 — 선택 필드를 단일 필터 식으로 변환.

Member search predicate composer.
Turns an optional-field MemberSearchCondition into one SQLAlchemy boolean
expression. Each field helper returns a clause or None when the field is
absent; clauses are folded with AND after dropping the absent ones, so an
absent operand is never passed to AND.

EMPTY_FILTER (None) is returned when no field is set and means
"match all rows"; apply_filter leaves the query untouched in that case.

Usage:
    expression = compose(MemberSearchCondition(age_goe=20, age_loe=30))
    query = apply_filter(select(Member).outerjoin(Member.team), expression)
"""

from typing import Any

from sqlalchemy import ColumnElement, Select, and_

from member_search.models.member import Member
from member_search.models.team import Team
from member_search.schemas.member import MemberSearchCondition

# 빈 필터 — 전체 행 일치 (Empty filter sentinel: match every row)
EMPTY_FILTER: None = None

# 필터 식 또는 빈 필터 — Filter expression or the empty filter
FilterExpression = ColumnElement[bool] | None


# === 필드별 조건 (Per-field clauses) ===

def username_eq(username: str | None) -> FilterExpression:
    """회원 이름 일치 조건 (Exact username match, None when absent)."""
    return Member.username == username if username is not None else None


def team_name_eq(team_name: str | None) -> FilterExpression:
    """조인된 팀 이름 일치 조건 — 쿼리에 Team 조인 필요.

    Exact match on the joined team name. The query the clause is applied
    to must join Team.
    """
    return Team.name == team_name if team_name is not None else None


def age_goe(age: int | None) -> FilterExpression:
    """나이 이상 조건 (age >= value, None when absent)."""
    return Member.age >= age if age is not None else None


def age_loe(age: int | None) -> FilterExpression:
    """나이 이하 조건 (age <= value, None when absent)."""
    return Member.age <= age if age is not None else None


def age_eq(age: int | None) -> FilterExpression:
    """나이 일치 조건 (age == value, None when absent)."""
    return Member.age == age if age is not None else None


# === 조합 (Composition) ===

def and_all(*clauses: FilterExpression) -> FilterExpression:
    """존재하는 조건만 AND로 결합합니다.

    Fold optional clauses with AND, skipping absent ones.

    Args:
        clauses: 조건 또는 None 목록 (Clauses, any of which may be None)

    Returns:
        FilterExpression: 결합된 조건, 모두 없으면 EMPTY_FILTER
                          (Combined clause, or EMPTY_FILTER when none present)
    """
    present: list[ColumnElement[bool]] = [c for c in clauses if c is not None]
    if not present:
        return EMPTY_FILTER
    if len(present) == 1:
        return present[0]
    return and_(*present)


def all_eq(username: str | None, age: int | None) -> FilterExpression:
    """회원 이름과 나이 일치 조건을 결합합니다.

    Combine username and age equality. Either side may be absent.
    """
    return and_all(username_eq(username), age_eq(age))


def compose(condition: MemberSearchCondition) -> FilterExpression:
    """검색 조건을 단일 필터 식으로 변환합니다.

    Compose a search condition into one filter expression.
    Clauses are applied in a fixed field order (username, team name,
    age lower bound, age upper bound) so the generated SQL is reproducible.

    Args:
        condition: 회원 검색 조건 (Member search condition)

    Returns:
        FilterExpression: 필터 식, 설정된 필드가 없으면 EMPTY_FILTER
                          (Filter expression, or EMPTY_FILTER when no field is set)
    """
    return and_all(
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    )


def apply_filter(query: Select[Any], expression: FilterExpression) -> Select[Any]:
    """필터 식을 쿼리에 적용합니다. 빈 필터면 쿼리를 그대로 반환.

    Apply a filter expression to a query; EMPTY_FILTER leaves it unchanged.
    """
    if expression is None:
        return query
    return query.where(expression)
