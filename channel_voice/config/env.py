"""Environment parsing helpers shared by the env-resolved config modules."""

from __future__ import annotations

import os

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off", "false", "no"}


def env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except Exception:
        return int(default)


def env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        return float(raw)
    except Exception:
        return float(default)


def env_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return bool(default)
    if raw in _DISABLED_VALUES:
        return False
    return raw in _TRUE_VALUES


def env_list(name: str) -> tuple[str, ...]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


__all__ = ["env_bool", "env_float", "env_int", "env_list", "env_str"]
