"""회원 검색 관련 Pydantic 스키마 정의.

Member search Pydantic schema definitions.
Covers the optional-field search condition, the member/team read
projection, and the aggregate projections used by the query catalogue.
All schemas are immutable once constructed.
"""

from pydantic import BaseModel, StrictInt, StrictStr


# === 검색 조건 (Search condition) 스키마 ===

class MemberSearchCondition(BaseModel):
    """회원 검색 조건 스키마 — 모든 필드 선택.

    Member search condition with optional fields.
    None means the filter was not requested; 0 is a real value and
    produces a clause. All fields absent means "match everything".
    Values are not coerced: ``True`` or ``"20"`` for an age is rejected.

    Attributes:
        username: 회원 이름 일치 (Exact username match, optional)
        team_name: 팀 이름 일치 (Exact joined team name match, optional)
        age_goe: 최소 나이, 이상 (Age greater-or-equal bound, optional)
        age_loe: 최대 나이, 이하 (Age less-or-equal bound, optional)
    """

    username: StrictStr | None = None  # 회원 이름 (Username, optional)
    team_name: StrictStr | None = None  # 팀 이름 (Team name, optional)
    age_goe: StrictInt | None = None  # 나이 하한 — 이상 (Lower age bound, inclusive)
    age_loe: StrictInt | None = None  # 나이 상한 — 이하 (Upper age bound, inclusive)

    model_config = {"frozen": True}

    def is_empty(self) -> bool:
        """설정된 필드가 하나도 없는지 여부."""
        return all(
            value is None
            for value in (self.username, self.team_name, self.age_goe, self.age_loe)
        )


# === 조회 프로젝션 (Read projection) 스키마 ===

class MemberTeamDto(BaseModel):
    """회원-팀 조인 조회 결과 스키마.

    Denormalized read projection of a member joined with its team.
    Never persisted; produced only by the search read path.

    Attributes:
        member_id: 회원 ID (Member identity)
        username: 회원 이름 (Username, nullable)
        age: 나이 (Age)
        team_id: 팀 ID (Team identity, null when member has no team)
        team_name: 팀 이름 (Team name, null when member has no team)
    """

    member_id: int
    username: str | None
    age: int
    team_id: int | None
    team_name: str | None

    model_config = {"frozen": True}


class MemberDto(BaseModel):
    """회원 이름/나이 프로젝션 스키마."""

    username: str | None
    age: int

    model_config = {"frozen": True}


# === 집계 (Aggregate) 스키마 ===

class TeamAgeStats(BaseModel):
    """팀별 평균 나이 스키마.

    Attributes:
        team_name: 팀 이름 (Team name)
        average_age: 평균 나이 (Average member age)
    """

    team_name: str
    average_age: float

    model_config = {"frozen": True}


class MemberAgeStats(BaseModel):
    """회원 나이 집계 스키마.

    Age aggregates over all members. Average, maximum and minimum
    are None when there are no members.

    Attributes:
        count: 회원 수 (Number of members)
        total: 나이 합계 (Sum of ages)
        average: 평균 나이 (Average age)
        maximum: 최고 나이 (Maximum age)
        minimum: 최저 나이 (Minimum age)
    """

    count: int
    total: int
    average: float | None
    maximum: int | None
    minimum: int | None

    model_config = {"frozen": True}
