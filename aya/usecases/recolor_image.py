"""Use case for recoloring a base image with an extracted palette."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from aya.domain.models import RecolorResult
from aya.domain.ports import PalettePort, UseCaseError
from aya.usecases.error_mapping import map_api_error

MISSING_INPUT_MESSAGE = "Please select both images"


def has_recolor_inputs(base_image_base64: Optional[str], palette: Sequence[str]) -> bool:
    """True when a base payload and at least one color are available."""
    return bool(base_image_base64) and len(palette) > 0


@dataclass
class RecolorImage:
    """Send base image + palette to ``PalettePort.recolor``."""

    palette_port: PalettePort

    def __call__(self, base_image_base64: Optional[str], palette: Sequence[str]) -> RecolorResult:
        if not has_recolor_inputs(base_image_base64, palette):
            raise UseCaseError("RECOLOR_MISSING_INPUT", MISSING_INPUT_MESSAGE)
        try:
            return self.palette_port.recolor(base_image_base64, tuple(palette))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="RECOLOR_FAILED",
                default_message="Failed to recolor image",
            ) from exc


__all__ = ["MISSING_INPUT_MESSAGE", "RecolorImage", "has_recolor_inputs"]
