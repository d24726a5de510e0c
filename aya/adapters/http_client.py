"""Shared HTTP transport for the palette API adapter.

This module provides a thin wrapper around ``requests.Session`` so the REST
adapter gets one place for timeout policy, retry behavior and JSON headers.

Dependencies:
    - ``requests`` for network I/O.
    - ``aya.adapters.api_errors.ApiTimeoutError`` for typed transport failures.

Call context:
    - Constructed by ``aya/adapters/palette_rest.py``.
    - Used only inside adapter methods; use cases interact through ports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from aya.adapters.api_errors import ApiError, ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for JSON API calls, ``None``
            waits for the server indefinitely.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: Optional[float] = None
    retries: int = 0


class RetryingSession:
    """Requests wrapper with JSON headers and an optional retry loop.

    This class is transport-only. Callers provide endpoint URLs and decide how
    to map non-2xx responses into adapter errors.
    """

    def __init__(self, cfg: HttpConfig) -> None:
        """Create a session.

        Args:
            cfg: Shared timeout and retry settings.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.session = requests.Session()
        self.cfg = cfg

    @staticmethod
    def _headers(json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send a JSON POST request, retrying only on transport failures.

        Args:
            url: Absolute endpoint URL.
            json_body: Optional payload object serialized to JSON text.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other ``requests`` failure (invalid URL, ...).
        """
        context = f"POST {url}"
        data = None if json_body is None else json.dumps(json_body)
        last_err: ApiTimeoutError | None = None
        attempts = max(0, int(self.cfg.retries)) + 1
        for _ in range(attempts):
            try:
                return self.session.post(
                    url,
                    data=data,
                    headers=self._headers(json_body=json_body is not None),
                    timeout=timeout if timeout is not None else self.cfg.request_timeout_s,
                )
            except req_exc.Timeout:
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
            except req_exc.ConnectionError:
                last_err = ApiTimeoutError(f"Could not reach {url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        raise last_err

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpConfig", "RetryingSession"]
