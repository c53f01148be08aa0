from __future__ import annotations

import json
import os

import pytest

from GESTAMED.server.utils.configurations import (
    build_server_settings,
    get_server_settings,
    load_configuration_data,
)
from GESTAMED.server.utils.constants import (
    DEFAULT_DOSAGE_UNITS,
    DEFAULT_FREQUENCY_TERMS,
    DEFAULT_LEXICON_FILE,
    PROJECT_DIR,
)
from GESTAMED.server.utils.exceptions import ConfigurationError
from GESTAMED.server.utils.types import coerce_bool, coerce_choice, coerce_str_sequence


# -----------------------------------------------------------------------------
def test_missing_sections_fall_back_to_defaults() -> None:
    settings = build_server_settings({})
    assert os.path.normpath(DEFAULT_LEXICON_FILE) == settings.lexicon.path
    assert settings.matching.merge_policy == "overwrite"
    assert settings.matching.dosage_units == DEFAULT_DOSAGE_UNITS
    assert settings.matching.frequency_terms == DEFAULT_FREQUENCY_TERMS
    assert settings.classification.strict_trimester is True
    assert settings.classification.default_trimester == "first"
    assert settings.logging.level == "INFO"
    assert settings.logging.log_to_file is False


# -----------------------------------------------------------------------------
def test_malformed_values_are_coerced() -> None:
    settings = build_server_settings(
        {
            "lexicon": {"path": "resources/lexicon/custom.json"},
            "matching": {
                "merge_policy": "UNION_DOSAGES",
                "dosage_units": "MG, ui, mg",
                "frequency_terms": 42,
            },
            "classification": {"strict_trimester": "no", "default_trimester": "fourth"},
            "logging": {"level": "verbose", "log_to_file": "yes"},
        }
    )
    assert settings.lexicon.path == os.path.join(
        PROJECT_DIR, "resources", "lexicon", "custom.json"
    )
    assert settings.matching.merge_policy == "union_dosages"
    assert settings.matching.dosage_units == ("mg", "ui")
    assert settings.matching.frequency_terms == DEFAULT_FREQUENCY_TERMS
    assert settings.classification.strict_trimester is False
    assert settings.classification.default_trimester == "first"
    assert settings.logging.level == "INFO"
    assert settings.logging.log_to_file is True


# -----------------------------------------------------------------------------
def test_unknown_merge_policy_uses_default() -> None:
    settings = build_server_settings({"matching": {"merge_policy": "random"}})
    assert settings.matching.merge_policy == "overwrite"


# -----------------------------------------------------------------------------
def test_get_server_settings_reads_file(tmp_path) -> None:
    config_path = tmp_path / "server_configurations.json"
    config_path.write_text(
        json.dumps({"classification": {"default_trimester": "Third"}}),
        encoding="utf-8",
    )
    settings = get_server_settings(str(config_path))
    assert settings.classification.default_trimester == "third"


# -----------------------------------------------------------------------------
def test_missing_configuration_file_yields_empty_payload(tmp_path) -> None:
    assert load_configuration_data(str(tmp_path / "absent.json")) == {}


# -----------------------------------------------------------------------------
def test_invalid_configuration_file_raises(tmp_path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_configuration_data(str(config_path))


# -----------------------------------------------------------------------------
@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("OFF", False), (1, True), ("maybe", True), (None, True)],
)
def test_coerce_bool(value, expected) -> None:
    assert coerce_bool(value, True) is expected


# -----------------------------------------------------------------------------
def test_coerce_choice_and_sequence() -> None:
    assert coerce_choice(" Second ", ("first", "second"), "first") == "second"
    assert coerce_choice(None, ("first", "second"), "first") == "first"
    assert coerce_str_sequence(["Veces", " ", "veces"], ("diario",)) == ("veces",)
    assert coerce_str_sequence([], ("diario",)) == ("diario",)
