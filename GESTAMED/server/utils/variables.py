from __future__ import annotations

import os

from dotenv import load_dotenv

from GESTAMED.server.utils.constants import ENV_FILE_PATH
from GESTAMED.server.utils.logger import logger


###############################################################################
class EnvironmentVariables:
    def __init__(self, env_path: str | None = None) -> None:
        self.env_path = env_path or ENV_FILE_PATH
        if os.path.exists(self.env_path):
            load_dotenv(dotenv_path=self.env_path, override=True)
        else:
            logger.debug(".env file not found at: %s", self.env_path)

    # -------------------------------------------------------------------------
    def get(self, key: str, default: str | None = None) -> str | None:
        value = os.environ.get(key)
        if value is None:
            return default
        stripped = value.strip()
        return stripped or default


env_variables = EnvironmentVariables()
