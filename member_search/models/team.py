"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - teams: 회원이 소속되는 팀 (Teams that members belong to)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from member_search.database import Base


class Team(Base):
    """팀 모델 — 회원의 소속 단위.

    Team model — Grouping unit for members.
    Team names are not unique in the schema; name-based searches match
    every team carrying that name.

    Attributes:
        id: 고유 식별자, 자동 증가 (Unique identifier, autoincrement)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members of this team)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — 자동 증가 정수 (Autoincrement integer identity)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name (required)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # 관계 — Relationships
    members = relationship("Member", back_populates="team", lazy="raise")

    def __repr__(self) -> str:
        return f"Team(id={self.id!r}, name={self.name!r})"
