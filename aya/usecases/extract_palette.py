"""Use case for extracting a color palette from an encoded image."""

from __future__ import annotations

from dataclasses import dataclass

from aya.domain.models import Palette
from aya.domain.ports import PalettePort, UseCaseError
from aya.usecases.error_mapping import map_api_error


@dataclass
class ExtractPalette:
    """Send one base64 image to ``PalettePort.extract_palette``."""

    palette_port: PalettePort

    def __call__(self, image_base64: str) -> Palette:
        """Return the server palette in server order (possibly empty)."""
        if not image_base64:
            raise UseCaseError("PALETTE_NO_IMAGE", "Image data is required.")
        try:
            return tuple(self.palette_port.extract_palette(image_base64))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="PALETTE_EXTRACT_FAILED",
                default_message="Palette extraction failed.",
            ) from exc


__all__ = ["ExtractPalette"]
