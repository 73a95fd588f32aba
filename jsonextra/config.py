"""Library configuration loaded from environment variables."""

from __future__ import annotations

import os

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def resolve_flag(env_var: str, default: bool) -> bool:
    """Read a boolean env var, falling back to *default* when unset or unrecognised."""
    raw = os.environ.get(env_var, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


class ExtraSettings:
    """Settings for jsonextra, loaded from environment variables.

    Prefix: JSONEXTRA_. Read on construction, so decoders built after an env
    change pick up the new values.
    """

    strict_dict_lengths: bool
    log_level: str
    log_service: str

    def __init__(self) -> None:
        self.strict_dict_lengths = resolve_flag("JSONEXTRA_STRICT_DICT_LENGTHS", True)
        self.log_level = os.environ.get("JSONEXTRA_LOG_LEVEL", "info")
        self.log_service = os.environ.get("JSONEXTRA_LOG_SERVICE", "jsonextra")
