"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 회원 (Members with an optional many-to-one team reference)
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.database import Base
from roster.models.audit import BaseEntity
from roster.models.team import Team


class Member(BaseEntity, Base):
    """회원 모델 — 사용자명, 나이, 소속 팀.

    Member model. Username is not unique; age must be non-negative.
    The team reference is optional and never cascades deletes either way.

    Attributes:
        id: 고유 식별자 (Surrogate key, assigned on insert)
        username: 사용자명 (Username, required, not unique)
        age: 나이 (Non-negative age)
        team_id: 소속 팀 FK (Optional team foreign key)

    Relationships:
        team: 소속 팀 (Referenced team, lazily loaded)

    Constraints:
        ck_member_age_non_negative: age >= 0
    """

    __tablename__ = "members"

    # 회원 고유 식별자 — Member surrogate key (assigned by the store on insert)
    id: Mapped[int] = mapped_column("member_id", Integer, primary_key=True, autoincrement=True)
    # 사용자명 — Username (중복 허용, duplicates allowed)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    # 나이 — Age (0 이상, never negative)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 소속 팀 FK — Team reference (팀 삭제 정책은 TeamRepository가 적용)
    team_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("teams.team_id"), nullable=True)

    __table_args__ = (
        CheckConstraint("age >= 0", name="ck_member_age_non_negative"),
    )

    # 관계 — Relationships (역방향 컬렉션 없음, no collection on Team)
    team: Mapped[Team | None] = relationship(Team, lazy="select")

    def change_team(self, team: Team | None) -> None:
        """소속 팀을 변경합니다 — Move the member to another team (or none)."""
        self.team = team

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, username={self.username!r}, age={self.age})>"
