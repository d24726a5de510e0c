"""Shared application state for the palette, home and result screens.

``AppStore`` replaces a process-wide global with an explicit container that
the composition root creates once and hands to every view-model. Tests build
a fresh store per case.

Each field is set independently; there is no transactional grouping. The
store is mutated only from the UI event-loop thread, so it carries no lock.
Subscribers are called synchronously after every effective change with the
field name and the new value.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from aya.domain.models import (
    EMPTY_PALETTE,
    Palette,
    PickedImage,
    RecolorResult,
    coerce_palette,
)

FIELD_PALETTE_IMAGE = "palette_image"
FIELD_PALETTE = "palette"
FIELD_BASE_IMAGE = "base_image"
FIELD_RECOLOR_RESULT = "recolor_result"
STORE_FIELDS = (
    FIELD_PALETTE_IMAGE,
    FIELD_PALETTE,
    FIELD_BASE_IMAGE,
    FIELD_RECOLOR_RESULT,
)

Listener = Callable[[str, Any], None]


class AppStore:
    """Typed get/set accessors plus change subscriptions for the four slots."""

    def __init__(self) -> None:
        self._log = logging.getLogger(__name__)
        self._palette_image: Optional[PickedImage] = None
        self._palette: Palette = EMPTY_PALETTE
        self._base_image: Optional[PickedImage] = None
        self._recolor_result: Optional[RecolorResult] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def palette_image(self) -> Optional[PickedImage]:
        return self._palette_image

    def set_palette_image(self, image: Optional[PickedImage]) -> None:
        if image == self._palette_image:
            return
        self._palette_image = image
        self._notify(FIELD_PALETTE_IMAGE, image)

    @property
    def palette(self) -> Palette:
        return self._palette

    def set_palette(self, palette: Sequence[str]) -> None:
        # Always notify, an identical palette from a fresh extraction still
        # counts as a completed update for observers.
        self._palette = coerce_palette(palette)
        self._notify(FIELD_PALETTE, self._palette)

    @property
    def base_image(self) -> Optional[PickedImage]:
        return self._base_image

    def set_base_image(self, image: Optional[PickedImage]) -> None:
        if image == self._base_image:
            return
        self._base_image = image
        self._notify(FIELD_BASE_IMAGE, image)

    @property
    def recolor_result(self) -> Optional[RecolorResult]:
        return self._recolor_result

    def set_recolor_result(self, result: Optional[RecolorResult]) -> None:
        self._recolor_result = result
        self._notify(FIELD_RECOLOR_RESULT, result)

    def snapshot(self) -> Dict[str, Any]:
        """Return the current value of every slot keyed by field name."""
        return {
            FIELD_PALETTE_IMAGE: self._palette_image,
            FIELD_PALETTE: self._palette,
            FIELD_BASE_IMAGE: self._base_image,
            FIELD_RECOLOR_RESULT: self._recolor_result,
        }

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def _notify(self, field_name: str, value: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(field_name, value)
            except Exception:
                self._log.exception("Store listener failed for %s", field_name)


__all__ = [
    "AppStore",
    "FIELD_BASE_IMAGE",
    "FIELD_PALETTE",
    "FIELD_PALETTE_IMAGE",
    "FIELD_RECOLOR_RESULT",
    "Listener",
    "STORE_FIELDS",
]
