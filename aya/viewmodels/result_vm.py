from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..domain.app_store import AppStore
from ..domain.models import ToastMessage
from ..domain.ports import ToastPort, UseCaseError

SaveFn = Callable[..., str]

_log = logging.getLogger(__name__)


@dataclass
class ResultVM:
    """Read-only view of the shared recolor result plus a save command."""

    store: AppStore
    save_result: SaveFn
    toast: ToastPort
    results_dir: Callable[[], str] = lambda: "."
    last_saved_path: Optional[str] = None

    @property
    def has_result(self) -> bool:
        return bool(self.store.recolor_result)

    @property
    def summary(self) -> str:
        payload = self.store.recolor_result
        if not payload:
            return "No recolored image yet."
        return f"Recolored image ready ({len(payload):,} characters)."

    def save(self) -> Optional[str]:
        """Persist the current result into the results folder."""
        try:
            path = self.save_result(self.store.recolor_result, self.results_dir())
        except UseCaseError as err:
            _log.warning("Saving recolor result failed: %s", err.message)
            self.toast.show(ToastMessage(type="error", title="Save failed", message=err.message))
            return None
        self.last_saved_path = path
        _log.info("Recolor result saved to %s", path)
        self.toast.show(ToastMessage(type="success", title="Saved", message=path))
        return path


__all__ = ["ResultVM"]
