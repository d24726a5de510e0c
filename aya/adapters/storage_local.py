from __future__ import annotations
import json, os
from typing import Any, Callable, Dict, Optional
from aya.domain.ports import StoragePort


class StorageLocal(StoragePort):
    """Local filesystem storage for user settings (JSON)."""

    SETTINGS_FILE = "user_settings.json"

    def __init__(
        self,
        root_dir: str = ".",
        *,
        defaults: Optional[Callable[[], Dict[str, Any]]] = None,
    ) -> None:
        self.root = root_dir
        self._defaults = defaults

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, self.SETTINGS_FILE)

    def save_user_settings(self, payload: Dict) -> None:
        if not isinstance(payload, dict):
            raise ValueError("Settings payload must be a dict.")
        os.makedirs(self.root, exist_ok=True)
        path = self.settings_path
        tmp_path = f"{path}.tmp"
        # atomic replace, readers never see a partial file
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)
        os.replace(tmp_path, path)

    def load_user_settings(self) -> Dict:
        path = self.settings_path
        if not os.path.exists(path):
            return self._default_payload()
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: settings file must hold a JSON object.")
        return data

    def _default_payload(self) -> Dict:
        if self._defaults is None:
            return {}
        return dict(self._defaults())
