"""감사 컬럼 믹스인.

Audit column mixins shared by every entity.

Columns:
    - created_date / last_modified_date: 생성·수정 일시 UTC
    - created_by / last_modified_by: 생성·수정 행위자 (actor from the auditor context)

The values are written by roster.mappers.auditing before each flush;
the columns carry no server-side defaults.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column


class BaseTimeEntity:
    """생성·수정 일시 믹스인 — Created/modified timestamps."""

    created_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_modified_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class BaseEntity(BaseTimeEntity):
    """생성·수정 행위자까지 포함한 감사 믹스인 — Timestamps plus actors."""

    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_modified_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
