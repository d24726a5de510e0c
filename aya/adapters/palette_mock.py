from __future__ import annotations

import hashlib
from typing import List, Sequence, Tuple

from aya.domain.models import Palette, RecolorResult
from aya.domain.ports import PalettePort


class PaletteMock(PalettePort):
    """In-memory palette service used for tests and offline development.

    The palette is derived from a hash of the image payload so the same image
    always yields the same colors (at most ten). ``recolor`` echoes the base image back.
    """

    def __init__(self, colors: int = 5) -> None:
        self.colors = min(10, max(0, int(colors)))
        self.extract_calls: List[str] = []
        self.recolor_calls: List[Tuple[str, Palette]] = []

    def extract_palette(self, image_base64: str) -> Palette:
        self.extract_calls.append(image_base64)
        digest = hashlib.sha256(image_base64.encode("utf-8")).hexdigest()
        return tuple(f"#{digest[i * 6:(i + 1) * 6].upper()}" for i in range(self.colors))

    def recolor(self, base_image_base64: str, palette: Sequence[str]) -> RecolorResult:
        self.recolor_calls.append((base_image_base64, tuple(palette)))
        return base_image_base64
