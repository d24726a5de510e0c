from __future__ import annotations
from typing import Optional, Protocol, Sequence

from aya.domain.models import Palette, PickedImage, RecolorResult, ToastMessage


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class PalettePort(Protocol):
    """Palette extraction and recoloring against the remote palette API."""

    def extract_palette(self, image_base64: str) -> Palette: ...
    def recolor(self, base_image_base64: str, palette: Sequence[str]) -> RecolorResult: ...


class ImagePickerPort(Protocol):
    """Lets the user choose an image. Returns ``None`` on cancel."""

    async def pick_image(self) -> Optional[PickedImage]: ...


class ClipboardPort(Protocol):
    def set_text(self, text: str) -> None: ...


class ToastPort(Protocol):
    """Non-blocking notifications (success/info/error)."""

    def show(self, message: ToastMessage) -> None: ...


class AlertPort(Protocol):
    """Blocking user alert (modal message box)."""

    def alert(self, message: str) -> None: ...


class NavigatorPort(Protocol):
    """Cross-screen navigation by route identifier."""

    def push(self, route: str) -> None: ...
    def replace(self, route: str) -> None: ...


class StoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: dict) -> None: ...
    def load_user_settings(self) -> dict: ...
