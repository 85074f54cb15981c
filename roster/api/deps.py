"""FastAPI 의존성 주입 모듈 — 행위자 및 페이지 요청.

FastAPI dependency module. Binds the request's actor into the auditor
context and turns query parameters into a validated PageRequest.
"""

from typing import Annotated

from fastapi import Query, Request

from roster.config import settings
from roster.utils.auditor import set_current_actor
from roster.utils.pagination import PageRequest, Sort


async def bind_actor(request: Request) -> str | None:
    """요청 헤더의 행위자를 감사 컨텍스트에 설정합니다.

    Read the actor from the configured header (X-Actor by default) and make
    it the current actor for this request. A missing header falls back to
    DEFAULT_AUDITOR.

    Returns:
        str | None: 헤더 값 (Header value, None when absent)
    """
    actor: str | None = request.headers.get(settings.AUDITOR_HEADER)
    set_current_actor(actor)
    return actor


def get_page_request(
    page: Annotated[int, Query(description="0부터 시작하는 페이지 번호 (0-based page index)")] = 0,
    size: Annotated[int, Query(description="페이지 크기 (Page size)")] = settings.DEFAULT_PAGE_SIZE,
    sort: Annotated[list[str] | None, Query(description="property[,asc|desc]")] = None,
) -> PageRequest:
    """쿼리 파라미터를 PageRequest로 변환합니다. 크기는 MAX_PAGE_SIZE로 제한.

    Raises:
        InvalidArgumentError: 잘못된 페이지/크기/정렬 (Bad page, size or sort)
    """
    return PageRequest.of(page, min(size, settings.MAX_PAGE_SIZE), Sort.parse(*(sort or [])))
