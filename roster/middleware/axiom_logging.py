"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Ships one structured event per request to Axiom: method, path, query,
status code, duration, the acting user and, for failed requests, the error
detail. Requests pass straight through when Axiom is not configured.
"""

import json
import logging
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from roster.config import settings

logger = logging.getLogger(__name__)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_DETAIL = 500


def _error_detail(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다 — Pull "detail" out of an error body."""
    try:
        data: Any = json.loads(body)
        detail: Any = data.get("detail", data) if isinstance(data, dict) else data
    except (json.JSONDecodeError, UnicodeDecodeError):
        detail = body.decode("utf-8", errors="replace")
    text = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    return text[:_MAX_DETAIL]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs every API request to Axiom. Ingest failures are
    logged locally and never affect the response.
    """

    def __init__(self, app: Any, client: AxiomClient | None = None) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._client: AxiomClient | None = client
        if self._client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _SKIP_PATHS or self._client is None:
            return await call_next(request)

        start_time = time.time()
        status_code: int = 500
        error: str | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code

            if status_code >= 400:
                # 응답 본문을 소비했으므로 다시 감싸서 반환 — re-wrap the consumed body
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error = _error_detail(body)
                response = Response(
                    content=body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
                "actor": request.headers.get(settings.AUDITOR_HEADER) or settings.DEFAULT_AUDITOR,
            }
            if request.query_params:
                event["query_params"] = dict(request.query_params)
            if error:
                event["error"] = error
            self._ingest(event)

        return response

    def _ingest(self, event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않음 — never break a request on log failure
            logger.warning("axiom ingest failed for %s %s", event["method"], event["path"], exc_info=True)
