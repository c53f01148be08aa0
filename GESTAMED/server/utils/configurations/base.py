from __future__ import annotations

import json
import os
from typing import Any

from GESTAMED.server.utils.exceptions import ConfigurationError


###############################################################################
def ensure_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


# -----------------------------------------------------------------------------
def load_configuration_data(path: str) -> dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Unable to load configuration from {path}") from exc
    return ensure_mapping(payload)


__all__ = ["ensure_mapping", "load_configuration_data"]
