from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from GESTAMED.server.utils.configurations.base import (
    ensure_mapping,
    load_configuration_data,
)
from GESTAMED.server.utils.constants import (
    DEFAULT_DOSAGE_UNITS,
    DEFAULT_FREQUENCY_TERMS,
    DEFAULT_LEXICON_FILE,
    DEFAULT_MERGE_POLICY,
    DEFAULT_TRIMESTER,
    MERGE_POLICIES,
    PROJECT_DIR,
    SERVER_CONFIGURATION_FILE,
    TRIMESTERS,
)
from GESTAMED.server.utils.types import (
    coerce_bool,
    coerce_choice,
    coerce_str,
    coerce_str_sequence,
)


# [SERVER SETTINGS]
###############################################################################
@dataclass(frozen=True)
class LexiconSettings:
    path: str


# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class MatchingSettings:
    merge_policy: str
    dosage_units: tuple[str, ...]
    frequency_terms: tuple[str, ...]


# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ClassificationSettings:
    strict_trimester: bool
    default_trimester: str


# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_to_file: bool


# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ServerSettings:
    lexicon: LexiconSettings
    matching: MatchingSettings
    classification: ClassificationSettings
    logging: LoggingSettings


# [BUILDER FUNCTIONS]
###############################################################################
def build_lexicon_settings(data: dict[str, Any]) -> LexiconSettings:
    path = coerce_str(data.get("path"), DEFAULT_LEXICON_FILE)
    if not os.path.isabs(path):
        path = os.path.join(PROJECT_DIR, path)
    return LexiconSettings(
        path=os.path.normpath(path),
    )


# -----------------------------------------------------------------------------
def build_matching_settings(data: dict[str, Any]) -> MatchingSettings:
    return MatchingSettings(
        merge_policy=coerce_choice(
            data.get("merge_policy"), MERGE_POLICIES, DEFAULT_MERGE_POLICY
        ),
        dosage_units=coerce_str_sequence(
            data.get("dosage_units"), DEFAULT_DOSAGE_UNITS
        ),
        frequency_terms=coerce_str_sequence(
            data.get("frequency_terms"), DEFAULT_FREQUENCY_TERMS
        ),
    )


# -----------------------------------------------------------------------------
def build_classification_settings(data: dict[str, Any]) -> ClassificationSettings:
    return ClassificationSettings(
        strict_trimester=coerce_bool(data.get("strict_trimester"), True),
        default_trimester=coerce_choice(
            data.get("default_trimester"), TRIMESTERS, DEFAULT_TRIMESTER
        ),
    )


# -----------------------------------------------------------------------------
def build_logging_settings(data: dict[str, Any]) -> LoggingSettings:
    level = coerce_str(data.get("level"), "INFO").upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        level = "INFO"
    return LoggingSettings(
        level=level,
        log_to_file=coerce_bool(data.get("log_to_file"), False),
    )


# -----------------------------------------------------------------------------
def build_server_settings(data: dict[str, Any] | Any) -> ServerSettings:
    payload = ensure_mapping(data)
    return ServerSettings(
        lexicon=build_lexicon_settings(ensure_mapping(payload.get("lexicon"))),
        matching=build_matching_settings(ensure_mapping(payload.get("matching"))),
        classification=build_classification_settings(
            ensure_mapping(payload.get("classification"))
        ),
        logging=build_logging_settings(ensure_mapping(payload.get("logging"))),
    )


# [SERVER CONFIGURATION LOADER]
###############################################################################
def get_server_settings(config_path: str | None = None) -> ServerSettings:
    path = config_path or SERVER_CONFIGURATION_FILE
    payload = load_configuration_data(path)
    return build_server_settings(payload)


server_settings = get_server_settings()
