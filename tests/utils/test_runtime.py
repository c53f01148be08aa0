from __future__ import annotations

import logging

from GESTAMED.server.utils.logger import configure_logger, logger
from GESTAMED.server.utils.services.analysis import configure_runtime
from GESTAMED.server.utils.variables import EnvironmentVariables


# -----------------------------------------------------------------------------
def test_environment_variables_load_dotenv_file(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("GESTAMED_TEST_FLAG", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("GESTAMED_TEST_FLAG=enabled\n", encoding="utf-8")
    variables = EnvironmentVariables(str(env_file))
    assert variables.get("GESTAMED_TEST_FLAG") == "enabled"
    monkeypatch.delenv("GESTAMED_TEST_FLAG", raising=False)


# -----------------------------------------------------------------------------
def test_environment_variables_fall_back_to_default(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("GESTAMED_BLANK", "   ")
    variables = EnvironmentVariables(str(tmp_path / "missing.env"))
    assert variables.get("GESTAMED_BLANK", "fallback") == "fallback"
    assert variables.get("GESTAMED_UNSET_VARIABLE") is None


# -----------------------------------------------------------------------------
def test_log_level_override_from_environment(monkeypatch) -> None:
    previous = logger.level
    monkeypatch.setenv("GESTAMED_LOG_LEVEL", "debug")
    try:
        configure_runtime()
        assert logger.level == logging.DEBUG
        configure_logger("not-a-level")
        assert logger.level == logging.INFO
    finally:
        logger.setLevel(previous)
