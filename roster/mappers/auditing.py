"""감사 컬럼 기록기.

Audit stamping. Writes created/modified timestamps and actors onto entities
right before they are flushed. The flush listener covers both explicit saves
and in-place mutations picked up by the unit of work; bulk UPDATE statements
never pass through it.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from roster.models.audit import BaseEntity, BaseTimeEntity
from roster.utils.auditor import get_current_actor

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def stamp_created(entity: BaseTimeEntity, actor: str, now: datetime | None = None) -> None:
    """신규 엔티티에 생성·수정 정보를 기록합니다.

    Stamp a new entity. Both the created and last-modified pairs get the
    same values, matching an entity that has not been touched since insert.
    """
    now = now or _utcnow()
    entity.created_date = now
    entity.last_modified_date = now
    if isinstance(entity, BaseEntity):
        entity.created_by = actor
        entity.last_modified_by = actor


def stamp_modified(entity: BaseTimeEntity, actor: str, now: datetime | None = None) -> None:
    """수정된 엔티티의 수정 정보만 갱신합니다 — Refresh the last-modified pair only."""
    entity.last_modified_date = now or _utcnow()
    if isinstance(entity, BaseEntity):
        entity.last_modified_by = actor


@event.listens_for(Session, "before_flush")
def _stamp_before_flush(session: Session, flush_context: Any, instances: Any) -> None:
    """flush 직전 신규/변경 엔티티에 감사 정보를 기록합니다."""
    actor: str = get_current_actor()
    now: datetime = _utcnow()

    for obj in session.new:
        if isinstance(obj, BaseTimeEntity):
            stamp_created(obj, actor, now)

    for obj in session.dirty:
        if isinstance(obj, BaseTimeEntity) and session.is_modified(obj, include_collections=False):
            stamp_modified(obj, actor, now)
            logger.debug("stamped modification of %r by %s", obj, actor)
