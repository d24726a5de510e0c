"""Use case that persists an opaque recolor payload to the results folder.

The palette screen never looks inside the payload. The result view uses this
use case when the user keeps a recolored image: the payload is treated as
base64 (optionally wrapped in a ``data:`` URI) and written as-is.
"""

from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from aya.domain.models import RecolorResult
from aya.domain.ports import UseCaseError

_MAGIC_EXTENSIONS = (
    (b"\x89PNG\r\n\x1a\n", ".png"),
    (b"\xff\xd8\xff", ".jpg"),
    (b"GIF8", ".gif"),
    (b"BM", ".bmp"),
)


def strip_data_uri(payload: str) -> str:
    """Drop a ``data:<mime>;base64,`` prefix if present."""
    text = payload.strip()
    if text.startswith("data:") and "," in text:
        return text.split(",", 1)[1]
    return text


def guess_extension(blob: bytes) -> str:
    for magic, extension in _MAGIC_EXTENSIONS:
        if blob.startswith(magic):
            return extension
    if blob[:4] == b"RIFF" and blob[8:12] == b"WEBP":
        return ".webp"
    return ".bin"


def decode_result(payload: RecolorResult) -> bytes:
    """Base64-decode a recolor payload, raising ``ValueError`` when invalid."""
    body = strip_data_uri(payload)
    if not body:
        raise ValueError("empty payload")
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"payload is not valid base64: {exc}") from exc


@dataclass
class SaveRecolorResult:
    """Write the decoded result into ``target_dir`` and return the file path."""

    now: Callable[[], datetime] = datetime.now

    def __call__(
        self,
        payload: Optional[RecolorResult],
        target_dir: str,
        *,
        stem: str = "recolor",
    ) -> str:
        if not payload:
            raise UseCaseError("RESULT_EMPTY", "No recolor result to save.")
        try:
            blob = decode_result(payload)
        except ValueError as exc:
            raise UseCaseError("RESULT_SAVE_FAILED", f"Result could not be decoded: {exc}") from exc

        timestamp = self.now().strftime("%Y%m%d-%H%M%S")
        filename = f"{stem}_{timestamp}{guess_extension(blob)}"
        path = os.path.abspath(os.path.join(target_dir or ".", filename))
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as handle:
                handle.write(blob)
        except OSError as exc:
            raise UseCaseError("RESULT_SAVE_FAILED", f"Could not write {path}: {exc}") from exc
        return path


__all__ = [
    "SaveRecolorResult",
    "decode_result",
    "guess_extension",
    "strip_data_uri",
]
