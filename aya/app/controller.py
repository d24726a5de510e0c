"""Adapter and use-case wiring for the desktop app runtime.

This module owns lazy construction of the palette REST adapter and the use
cases that depend on values in :class:`aya.viewmodels.settings_vm.SettingsVM`.
It is invoked once by the composition root before view-models are built;
settings edits take effect on the next start.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.palette_mock import PaletteMock
from ..adapters.palette_rest import PaletteRestAdapter
from ..domain.ports import PalettePort
from ..usecases.extract_palette import ExtractPalette
from ..usecases.recolor_image import RecolorImage
from ..usecases.save_recolor_result import SaveRecolorResult
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache runtime adapters/use-cases from settings state.

    Call chain:
        ``aya.app.main.App`` creates one instance and asks it for use cases
        when wiring the palette and result view-models.
    """

    def __init__(self, settings_vm: SettingsVM, *, offline: bool = False) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Settings holding base URL, timeout and retry policy.
            offline: Use the in-memory ``PaletteMock`` instead of HTTP.
        """
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        self.offline = offline
        self._palette_adapter: Optional[PalettePort] = None
        self.uc_extract: Optional[ExtractPalette] = None
        self.uc_recolor: Optional[RecolorImage] = None
        self.uc_save_result: Optional[SaveRecolorResult] = None

    @property
    def palette_adapter(self) -> Optional[PalettePort]:
        """Return the cached adapter used for palette/recolor requests."""
        return self._palette_adapter

    def ensure_ready(self) -> bool:
        """Ensure adapter and use cases exist.

        Returns:
            ``True`` when dependencies are available, ``False`` when the
            configured base URL is unusable.
        """
        if self._palette_adapter is not None:
            return True
        if self.offline:
            self._palette_adapter = PaletteMock()
            self._log.info("Palette API: offline mock")
        else:
            try:
                self._palette_adapter = PaletteRestAdapter(
                    self.settings_vm.api_base_url,
                    request_timeout_s=self.settings_vm.request_timeout_s,
                    retries=self.settings_vm.retries,
                )
            except ValueError as exc:
                self._log.error("Palette API unavailable: %s", exc)
                return False
            self._log.info("Palette API: %s", self.settings_vm.api_base_url)
        self.uc_extract = ExtractPalette(self._palette_adapter)
        self.uc_recolor = RecolorImage(self._palette_adapter)
        self.uc_save_result = SaveRecolorResult()
        return True

    def close(self) -> None:
        """Close the REST adapter's HTTP session, if one was built."""
        if isinstance(self._palette_adapter, PaletteRestAdapter):
            self._palette_adapter.close()


__all__ = ["AppController"]
