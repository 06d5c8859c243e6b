from __future__ import annotations

import os
from typing import Mapping, Optional

from .settings import DEFAULT_INDENT, InspectSettings


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> InspectSettings:
    env = os.environ if environ is None else environ

    def _bool(key: str, default: bool) -> bool:
        raw = env.get(key)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _int(key: str, default: int) -> int:
        raw = env.get(key)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            raise RuntimeError(f"Invalid integer for {key}: {raw!r}") from exc
        if value < 0:
            raise RuntimeError(f"{key} must not be negative, got {value}")
        return value

    return InspectSettings(
        indent=_int("JWT_INSPECT_INDENT", DEFAULT_INDENT),
        show_signature=_bool("JWT_INSPECT_SHOW_SIGNATURE", True),
        json_output=_bool("JWT_INSPECT_JSON", False),
        verbose=_bool("JWT_INSPECT_VERBOSE", False),
    )
