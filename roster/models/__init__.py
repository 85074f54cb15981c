"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata and
installs the auditing flush listener.

Modules:
    audit: 감사 컬럼 믹스인 (Audit column mixins)
    team: 팀 (Team)
    member: 회원 (Member)
"""

from roster.models.audit import BaseEntity, BaseTimeEntity
from roster.models.team import Team
from roster.models.member import Member
from roster.mappers import auditing  # noqa: F401 — installs the before_flush listener

__all__ = [
    "BaseEntity", "BaseTimeEntity",
    "Team", "Member",
]
