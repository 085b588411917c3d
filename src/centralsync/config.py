"""Provider configuration: fleet manager endpoint and credential source."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from .errors import AuthError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.openshift.com"


class ProviderConfig(BaseModel):
    """Where to reach the fleet manager and where to find its credentials."""

    name: str
    endpoint: str = DEFAULT_ENDPOINT
    credentials_source: Literal["env", "file", "inline", "none"] = "env"
    credentials_env: str = "OCM_TOKEN"
    credentials_file: str = ""
    credentials: str = ""
    timeout: float = 30.0

    def extract_credentials(self) -> str:
        """Return the raw credential blob named by this config."""
        source = self.credentials_source
        if source == "env":
            value = os.environ.get(self.credentials_env)
            if value is None:
                logger.warning("Environment variable '%s' is not set", self.credentials_env)
                return ""
            return value
        if source == "file":
            try:
                return Path(self.credentials_file).read_text()
            except OSError as exc:
                raise AuthError(f"cannot get credentials: {exc}") from exc
        if source == "inline":
            return self.credentials
        return ""
