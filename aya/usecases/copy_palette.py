from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from aya.domain.models import ToastMessage
from aya.domain.ports import ClipboardPort, ToastPort, UseCaseError

COPIED_TOAST = ToastMessage(
    type="success",
    title="Copied!",
    message="Palette saved to clipboard",
    position="bottom",
)


def format_palette(palette: Sequence[str]) -> str:
    return ", ".join(palette)


@dataclass
class CopyPalette:
    clipboard: ClipboardPort
    toast: ToastPort

    def __call__(self, palette: Sequence[str]) -> str:
        if not palette:
            raise UseCaseError("PALETTE_EMPTY", "No palette to copy.")
        text = format_palette(palette)
        try:
            self.clipboard.set_text(text)
        except Exception as exc:
            raise UseCaseError("CLIPBOARD_FAILED", f"Could not copy palette: {exc}") from exc
        self.toast.show(COPIED_TOAST)
        return text


__all__ = ["COPIED_TOAST", "CopyPalette", "format_palette"]
