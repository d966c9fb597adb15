"""Runtime configuration state management."""

from __future__ import annotations

import os
from typing import Optional

from tracelet.errors import ConfigError

SERVICE_NAME_ENV = "TRACELET_SERVICE_NAME"

_DEFAULTS = {
    "service_name": "unknown_service",
    "instrumentation_scope": "tracelet",
}

# Global runtime configuration state
_config = dict(_DEFAULTS)


def _require_name(key: str, value: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key} must be a non-empty string", {"value": value})
    return value.strip()


def set_service_name(value: str) -> None:
    _config["service_name"] = _require_name("service_name", value)


def get_service_name() -> str:
    return _config["service_name"]


def set_instrumentation_scope(value: str) -> None:
    _config["instrumentation_scope"] = _require_name("instrumentation_scope", value)


def get_instrumentation_scope() -> str:
    return _config["instrumentation_scope"]


def load_service_name(override: Optional[str] = None) -> str:
    """
    Resolve the service name reported on exported spans.

    Priority: explicit override, then the TRACELET_SERVICE_NAME environment
    variable, then the configured value.
    """
    if override:
        return _require_name("service_name", override)
    env_value = os.getenv(SERVICE_NAME_ENV)
    if env_value and env_value.strip():
        return env_value.strip()
    return get_service_name()


def reset() -> None:
    """Restore every setting to its default."""
    _config.clear()
    _config.update(_DEFAULTS)
