"""Value objects and workflow state for the palette screen.

The shared store only ever holds these types. ``WorkflowState`` is derived on
demand from store contents plus the view-model busy marker, so there is no
second source of truth that could drift from the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Literal, Optional, Tuple

Palette = Tuple[str, ...]
RecolorResult = str
BusyKind = Literal["pick", "extract", "recolor"]

EMPTY_PALETTE: Palette = ()
DEFAULT_API_BASE_URL = "https://palette-backend-hqcb.onrender.com"
RESULT_ROUTE = "/result"
HOME_ROUTE = "/"


@dataclass(frozen=True)
class PickedImage:
    """Image returned by the picker.

    Attributes:
        uri: Identifier of the picked image (file path or URI).
        base64: Encoded image bytes, or ``None`` when the picker could not
            provide them.
    """

    uri: str
    base64: Optional[str] = None

    @property
    def has_payload(self) -> bool:
        return bool(self.base64)


@dataclass(frozen=True)
class ToastMessage:
    """Non-blocking notification payload for the toast presenter."""

    type: Literal["success", "error", "info"]
    title: str
    message: str = ""
    position: Literal["top", "bottom"] = "bottom"


class WorkflowState(Enum):
    IDLE = "idle"
    READY = "ready"
    EXTRACTING = "extracting"
    PALETTE_AVAILABLE = "palette_available"
    RECOLORING = "recoloring"
    DONE = "done"


def derive_workflow_state(
    palette_image: Optional[PickedImage],
    palette: Palette,
    busy_kind: Optional[BusyKind] = None,
    navigated: bool = False,
) -> WorkflowState:
    """Map store contents and the busy marker onto a ``WorkflowState``."""
    if busy_kind == "extract":
        return WorkflowState.EXTRACTING
    if busy_kind == "recolor":
        return WorkflowState.RECOLORING
    if navigated:
        return WorkflowState.DONE
    if palette:
        return WorkflowState.PALETTE_AVAILABLE
    if palette_image is not None:
        return WorkflowState.READY
    return WorkflowState.IDLE


def coerce_palette(raw: Iterable[Any]) -> Palette:
    """Return an immutable palette, keeping order and rejecting non-strings."""
    colors = []
    for entry in raw:
        if not isinstance(entry, str):
            raise TypeError(f"Palette entries must be strings, got {type(entry).__name__}")
        colors.append(entry)
    return tuple(colors)


__all__ = [
    "BusyKind",
    "DEFAULT_API_BASE_URL",
    "EMPTY_PALETTE",
    "HOME_ROUTE",
    "Palette",
    "PickedImage",
    "RESULT_ROUTE",
    "RecolorResult",
    "ToastMessage",
    "WorkflowState",
    "coerce_palette",
    "derive_workflow_state",
]
