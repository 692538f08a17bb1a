"""Axiom API 로깅 미들웨어.

Axiom API logging middleware for the scheduling API.
Every request becomes one structured event tagged with the store id and
the scheduling area (``shifts``, ``gestures``, ``coverage``, ...) it
touches. Error responses carry their ``detail``; sensitive fields
(password, token, secret) are masked. Gesture pointer moves arrive many
times per second, so successful PATCH /gestures/current calls are not sent.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and query strings
_SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# 매장 하위 경로 — /api/v1/admin/stores/{store_id}/{area}/...
_STORE_PATH = re.compile(r"/stores/(?P<store_id>[0-9a-fA-F-]{32,36})(?:/(?P<area>[a-z-]+))?")
_TIMELINE_PATH = re.compile(r"/api/v1/admin/timeline(?:/|$)")

_MAX_BODY_CHARS = 2000
_MAX_DETAIL_CHARS = 500


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def describe_path(path: str) -> dict[str, str]:
    """경로에서 매장 ID와 스케줄링 영역을 추출합니다.

    Tag a request path with its store id and scheduling area.
    Routing has not run yet inside the middleware, so the tags are parsed
    from the raw path.
    """
    if _TIMELINE_PATH.match(path):
        return {"area": "timeline"}
    match = _STORE_PATH.search(path)
    if match is None:
        return {"area": "stores"} if path.rstrip("/").endswith("/stores") else {}
    return {"store_id": match.group("store_id"), "area": match.group("area") or "stores"}


def _error_detail(body: bytes) -> str:
    """에러 응답 body에서 사유 추출 — ``{"detail": ...}`` or the raw text."""
    try:
        data = json.loads(body)
        detail = data.get("detail", data) if isinstance(data, dict) else data
        text: str = detail if isinstance(detail, str) else json.dumps(detail)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = body.decode("utf-8", errors="replace")
    if len(text) > _MAX_DETAIL_CHARS:
        return text[:_MAX_DETAIL_CHARS] + "..."
    return text


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """스케줄링 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that sends one event per API request to Axiom.
    Passes requests straight through when no Axiom token/dataset is set.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_body(self, request: Request) -> Any:
        """요청 body 읽기 (POST/PUT/PATCH만) — masked and size-limited JSON."""
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        raw: bytes = await request.body()
        if not raw:
            return None
        try:
            body: Any = _mask_dict(json.loads(raw))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"
        if isinstance(body, str) and len(body) > _MAX_BODY_CHARS:
            return body[:_MAX_BODY_CHARS] + "...(truncated)"
        return body

    async def _capture_error(self, response: Response) -> tuple[Response, str]:
        """에러 응답 body를 읽고 같은 내용으로 다시 감싸 반환합니다."""
        body: bytes = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
        rebuilt: Response = Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
        return rebuilt, _error_detail(body)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS or not self._client:
            return await call_next(request)

        started: float = time.time()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            **describe_path(request.url.path),
        }
        if request.query_params:
            event["query_params"] = _mask_dict(dict(request.query_params))
        request_body: Any = await self._read_body(request)
        if request_body is not None:
            event["request_body"] = request_body

        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            if status_code >= 400:
                response, event["error"] = await self._capture_error(response)
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["status_code"] = status_code
            event["duration_ms"] = round((time.time() - started) * 1000, 2)

            # 포인터 이동은 성공 시 전송 생략 — Successful pointer moves are not sent
            pointer_move: bool = (
                event["method"] == "PATCH" and event.get("area") == "gestures" and status_code < 400
            )
            if not pointer_move:
                try:
                    self._client.ingest_events(self._dataset, [event])
                except Exception:
                    pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure

        return response
