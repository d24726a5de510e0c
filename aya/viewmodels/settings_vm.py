from __future__ import annotations

import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Mapping, Optional

from ..domain.models import DEFAULT_API_BASE_URL

BASE_URL_ENV_VAR = "AYA_API_BASE_URL"


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: Optional[int] = None
    retries: int = 0
    results_dir: str = "."
    notify_extraction_errors: bool = False


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.debug_logging: bool = False
        # process-only override, never part of to_dict
        self._env_base_url: Optional[str] = None

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def api_base_url(self) -> str:
        return self._env_base_url or self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self.config = replace(self.config, api_base_url=self._coerce_url(value))

    @property
    def request_timeout_s(self) -> Optional[int]:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: Any) -> None:
        self.config = replace(self.config, request_timeout_s=self._coerce_timeout(value))

    @property
    def retries(self) -> int:
        return self.config.retries

    @retries.setter
    def retries(self, value: Any) -> None:
        coerced = self._coerce_int("retries", value, allow_negative=False)
        self.config = replace(self.config, retries=coerced)

    @property
    def results_dir(self) -> str:
        return self.config.results_dir

    @results_dir.setter
    def results_dir(self, value: str) -> None:
        self.config = replace(self.config, results_dir=self._coerce_dir(value))

    @property
    def notify_extraction_errors(self) -> bool:
        return self.config.notify_extraction_errors

    @notify_extraction_errors.setter
    def notify_extraction_errors(self, value: Any) -> None:
        coerced = self._coerce_bool(value)
        self.config = replace(self.config, notify_extraction_errors=coerced)

    # ------------------------------------------------------------------
    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_flat_keys = {*SettingsConfig.__annotations__.keys(), "debug_logging"}
        unknown = set(payload.keys()) - allowed_flat_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates = {}
        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])

        if updates:
            self.config = replace(self.config, **updates)

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Let ``AYA_API_BASE_URL`` override the base URL for this process.

        The override wins over the stored value but is left out of
        ``to_dict`` so saving settings keeps the URL the user configured.
        """
        env = os.environ if environ is None else environ
        override = (env.get(BASE_URL_ENV_VAR) or "").strip()
        self._env_base_url = self._coerce_url(override) if override else None

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def cmd_save(self) -> None:
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "api_base_url":
            return self._coerce_url(raw)
        if key == "request_timeout_s":
            return self._coerce_timeout(raw)
        if key == "retries":
            return self._coerce_int(key, raw, allow_negative=False)
        if key == "results_dir":
            return self._coerce_dir(raw)
        if key == "notify_extraction_errors":
            return self._coerce_bool(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_url(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("api_base_url must be a non-empty string.")
        text = value.strip().rstrip("/")
        if not text.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://.")
        return text

    @classmethod
    def _coerce_timeout(cls, value: Any) -> Optional[int]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        coerced = cls._coerce_int("request_timeout_s", value, allow_negative=False)
        # 0 means "no timeout", same as null
        return coerced or None

    @staticmethod
    def _coerce_dir(value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("results_dir must be a string path.")
        return value.strip() or "."

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, allow_negative: bool = True) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if not allow_negative and coerced < 0:
            raise ValueError(f"{name} must be non-negative.")
        return coerced


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()
