"""Runtime configuration for kvx."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_AZ_TIMEOUT_S = 60.0


@dataclass
class RuntimeConfig:
    """Runtime configuration provided by CLI or tests."""

    mock: bool = False
    debug_mode: bool = False
    log_file: Path | None = None
    az_path: str = "az"
    az_timeout_s: float = DEFAULT_AZ_TIMEOUT_S
    smoke_test: bool = False

    @classmethod
    def from_env(cls) -> RuntimeConfig:
        def _parse_bool(value: str | None, default: bool) -> bool:
            if value is None or not value.strip():
                return default
            return value.strip().lower() in {"1", "true", "yes", "on"}

        def _parse_timeout(value: str | None) -> float:
            if not value:
                return DEFAULT_AZ_TIMEOUT_S
            try:
                parsed = float(value)
            except (TypeError, ValueError):
                return DEFAULT_AZ_TIMEOUT_S
            return parsed if parsed > 0 else DEFAULT_AZ_TIMEOUT_S

        log_file = os.environ.get("KVX_LOG_FILE", "").strip() or None
        return cls(
            mock=_parse_bool(os.environ.get("KVX_MOCK"), False),
            debug_mode=_parse_bool(os.environ.get("KVX_DEBUG"), False),
            log_file=Path(log_file).expanduser() if log_file else None,
            az_path=os.environ.get("KVX_AZ_PATH", "").strip() or "az",
            az_timeout_s=_parse_timeout(os.environ.get("KVX_AZ_TIMEOUT")),
        )
