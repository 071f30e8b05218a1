"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.
Each member optionally belongs to one team (many-to-one).

Tables:
    - members: 회원 (Members with username, age and team reference)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from member_search.database import Base


class Member(Base):
    """회원 모델 — 검색 대상 엔티티.

    Member model — The entity searched by the member search core.
    Identity is an autoincrement integer so that ordering by id follows
    insertion order and gives a stable pagination tiebreak.

    Attributes:
        id: 고유 식별자, 자동 증가 (Unique identifier, autoincrement)
        username: 회원 이름 (Username, nullable)
        age: 나이 (Age in years)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Owning team, loaded only on request via selectinload)
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — 자동 증가 정수 (Autoincrement integer identity)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 회원 이름 — 이름 없는 회원도 허용 (Nullable: members without a name sort last)
    username: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # 나이 — Age in years
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK — 팀 삭제 시 소속 해제 (SET NULL on team deletion)
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )

    # 관계 — Relationships
    team = relationship("Team", back_populates="members", lazy="raise")

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, username={self.username!r}, age={self.age!r})"
