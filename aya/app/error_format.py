"""Turn any exception raised in the UI layer into a toast-ready message."""

from __future__ import annotations

import logging
from typing import Optional

from aya.adapters.api_errors import ApiError
from aya.domain.ports import UseCaseError
from aya.usecases.error_mapping import map_api_error

_log = logging.getLogger(__name__)


def format_error_message(err: Exception, *, context: Optional[str] = None) -> str:
    if isinstance(err, UseCaseError):
        _log.warning("UseCase error (%s): %s", err.code, err.message)
        message = err.message
    elif isinstance(err, ApiError):
        _log.warning("API error (%s): %s", getattr(err, "context", ""), err)
        message = map_api_error(err, default_code="API_ERROR").message
    else:
        _log.error("Unexpected error: %s", err, exc_info=err)
        message = str(err) or type(err).__name__
    if context:
        return f"{context}: {message}"
    return message


__all__ = ["format_error_message"]
