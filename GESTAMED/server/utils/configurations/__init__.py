from __future__ import annotations

from GESTAMED.server.utils.configurations.base import (
    ensure_mapping,
    load_configuration_data,
)
from GESTAMED.server.utils.configurations.server import (
    ClassificationSettings,
    LexiconSettings,
    LoggingSettings,
    MatchingSettings,
    ServerSettings,
    build_server_settings,
    get_server_settings,
    server_settings,
)

__all__ = [
    "ensure_mapping",
    "load_configuration_data",
    "ClassificationSettings",
    "LexiconSettings",
    "LoggingSettings",
    "MatchingSettings",
    "ServerSettings",
    "build_server_settings",
    "get_server_settings",
    "server_settings",
]
