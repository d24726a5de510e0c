"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from aya.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiResponseError,
    ApiServerError,
    ApiTimeoutError,
)
from aya.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by a port call.
        default_code: Code used for exceptions that are not adapter errors.
        default_message: Message used for those exceptions instead of ``str(exc)``.

    Returns:
        UseCaseError: Error carrying a stable ``code`` and display ``message``.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint
        if status in (400, 413, 415, 422):
            return UseCaseError(
                "INVALID_IMAGE",
                _compose_error_message("Image rejected by server", hint),
            )
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, hint))
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Palette server error, try again.")
    if isinstance(exc, ApiResponseError):
        return UseCaseError("BAD_RESPONSE", "Unexpected response from palette server.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    """Join ``base`` and an optional hint into one sentence."""
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
