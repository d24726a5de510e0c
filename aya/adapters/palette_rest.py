"""REST adapter for the remote palette extraction and recolor service.

Endpoints (JSON in, JSON out):
    - ``POST /palette``  ``{"image": b64}`` -> ``{"palette": ["#RRGGBB", ...]}``
    - ``POST /recolor``  ``{"image": b64, "palette": [...]}`` -> ``{"recolor": str}``

The adapter never interprets hex strings or the recolor payload. Any deviation
from the response contract is raised as ``ApiResponseError`` so callers can
treat transport, HTTP and body failures alike.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import requests

from aya.domain.models import DEFAULT_API_BASE_URL, Palette, RecolorResult, coerce_palette
from aya.domain.ports import PalettePort

from .api_errors import (
    ApiClientError,
    ApiError,
    ApiResponseError,
    ApiServerError,
    build_error_message,
    error_detail,
)
from .http_client import HttpConfig, RetryingSession

DEFAULT_BASE_URL = DEFAULT_API_BASE_URL


class PaletteRestAdapter(PalettePort):
    """HTTP client for ``/palette`` and ``/recolor``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        request_timeout_s: Optional[float] = None,
        retries: int = 0,
    ) -> None:
        cleaned = str(base_url or "").strip()
        if not cleaned:
            raise ValueError("PaletteRestAdapter requires a base URL")

        self._log = logging.getLogger(__name__)
        self.base_url = cleaned.rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(self.cfg)

    def extract_palette(self, image_base64: str) -> Palette:
        ctx = "palette"
        url = self._make_url("/palette")
        resp = self.session.post(url, json_body={"image": image_base64})
        self._ensure_ok(resp, ctx)
        data = self._json_object(resp, ctx)
        raw = data.get("palette")
        if not isinstance(raw, list):
            raise ApiResponseError(
                f"{ctx}: response has no 'palette' list",
                status=resp.status_code,
                context=ctx,
            )
        try:
            palette = coerce_palette(raw)
        except TypeError as exc:
            raise ApiResponseError(f"{ctx}: {exc}", status=resp.status_code, context=ctx) from exc
        self._log.debug("palette: %d colors", len(palette))
        return palette

    def recolor(self, base_image_base64: str, palette: Sequence[str]) -> RecolorResult:
        ctx = "recolor"
        url = self._make_url("/recolor")
        body = {"image": base_image_base64, "palette": list(palette)}
        resp = self.session.post(url, json_body=body)
        self._ensure_ok(resp, ctx)
        data = self._json_object(resp, ctx)
        result = data.get("recolor")
        if not isinstance(result, str):
            raise ApiResponseError(
                f"{ctx}: response has no 'recolor' string",
                status=resp.status_code,
                context=ctx,
            )
        return result

    def close(self) -> None:
        """Release the pooled HTTP connections."""
        self.session.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        status = resp.status_code
        if 200 <= status < 300:
            return
        detail = error_detail(resp)
        message = build_error_message(ctx, status, detail)
        if 400 <= status < 500:
            raise ApiClientError(message, status=status, hint=detail, context=ctx)
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, context=ctx)
        raise ApiError(message, status=status, context=ctx)

    @staticmethod
    def _json_object(resp: requests.Response, ctx: str) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (getattr(resp, "text", "") or "")[:200]
            raise ApiResponseError(
                f"{ctx}: invalid JSON response: {snippet}",
                status=resp.status_code,
                context=ctx,
            ) from exc
        if not isinstance(data, dict):
            raise ApiResponseError(
                f"{ctx}: expected object response",
                status=resp.status_code,
                context=ctx,
            )
        return data


__all__ = ["DEFAULT_BASE_URL", "PaletteRestAdapter"]
