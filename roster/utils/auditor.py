"""현재 행위자(감사자) 컨텍스트.

Current actor context. The value stamped into created_by/last_modified_by
is read from a ContextVar, so each request or task carries its own actor.

Usage:
    with acting_as("alice"):
        await member_repository.save(db, member)
"""

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar

from roster.config import settings

_current_actor: ContextVar[str | None] = ContextVar("current_actor", default=None)


def get_current_actor() -> str:
    """현재 행위자를 반환합니다. 미지정 시 DEFAULT_AUDITOR."""
    return _current_actor.get() or settings.DEFAULT_AUDITOR


def set_current_actor(actor: str | None) -> None:
    """현재 컨텍스트의 행위자를 설정합니다 (None이면 기본값으로 복귀)."""
    _current_actor.set(actor)


@contextmanager
def acting_as(actor: str) -> Generator[str, None, None]:
    """블록 동안 행위자를 지정하고 종료 시 이전 값으로 복원합니다.

    Bind the actor for the duration of the block and restore the previous
    value afterwards, even when the block raises.
    """
    token = _current_actor.set(actor)
    try:
        yield actor
    finally:
        _current_actor.reset(token)
