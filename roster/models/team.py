"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - teams: 팀 (Teams; members point here, a team never owns its members)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from roster.database import Base
from roster.models.audit import BaseEntity


class Team(BaseEntity, Base):
    """팀 모델 — 회원이 참조하는 그룹.

    Team model. Members reference a team through members.team_id;
    there is no relationship back to the members, so nothing cascades
    from a team to its members.

    Attributes:
        id: 고유 식별자 (Surrogate key, assigned on insert)
        name: 팀 이름 (Team name)
    """

    __tablename__ = "teams"

    # 팀 고유 식별자 — Team surrogate key (assigned by the store on insert)
    id: Mapped[int] = mapped_column("team_id", Integer, primary_key=True, autoincrement=True)
    # 팀 이름 — Team display name
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, name={self.name!r})>"
