"""Typed failures raised by the palette API adapter.

The palette backend reports errors as a JSON object with a ``detail`` or
``error`` string (FastAPI validation errors put a list of ``{"msg": ...}``
items under ``detail``), or as plain text from a proxy. ``error_detail``
reduces any of these to one short line that ends up in the ``hint`` of a
client error and in the exception message.
"""

from __future__ import annotations

from typing import Any, Optional

DETAIL_LIMIT = 200


class ApiError(RuntimeError):
    """Base class for palette API adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        hint: Optional[str] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.hint = hint
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx, the server refused the request (bad or oversized image)."""


class ApiServerError(ApiError):
    """HTTP 5xx from the palette service."""


class ApiTimeoutError(ApiError):
    """Timeout or connection failure before any response arrived."""


class ApiResponseError(ApiError):
    """2xx response whose body is not JSON or lacks the expected field."""


def error_detail(resp: Any) -> Optional[str]:
    """Return the server's explanation for a failed response, if any."""
    try:
        payload = resp.json()
    except ValueError:
        payload = getattr(resp, "text", "") or ""
    return _detail_text(payload)


def _detail_text(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("detail", "error", "message"):
            text = _detail_text(payload.get(key))
            if text:
                return text
        return None
    if isinstance(payload, list):
        # FastAPI: [{"loc": [...], "msg": "...", "type": "..."}]
        for item in payload:
            text = _detail_text(item.get("msg") if isinstance(item, dict) else item)
            if text:
                return text
        return None
    if isinstance(payload, str):
        text = " ".join(payload.split())
        return text[:DETAIL_LIMIT] or None
    return None


def build_error_message(ctx: str, status: int, detail: Optional[str]) -> str:
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiResponseError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "error_detail",
]
