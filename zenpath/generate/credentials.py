# API key resolution.
# Order is fixed: in-memory override, then the first secrets.json found.
# Nothing here is fatal; a missing key is reported when a client first needs it.

from __future__ import annotations
import json
import os
from typing import Optional, Sequence

from zenpath.log import get_logger

logger = get_logger("credentials")

SECRETS_JSON_KEY = "ApiKey"


def read_secret_file(path: str) -> Optional[str]:
    """Return the ApiKey field of a secrets.json, or None if unusable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read secrets file %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Secrets file %s is not a JSON object", path)
        return None
    value = data.get(SECRETS_JSON_KEY)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class CredentialResolver:
    def __init__(self, override: Optional[str] = None, secret_paths: Sequence[str] = ()):
        self.override = override
        self.secret_paths = tuple(secret_paths)
        self._cached: Optional[str] = None

    def resolve(self) -> Optional[str]:
        """First non-empty source wins. Cached once found."""
        if self._cached:
            return self._cached
        if self.override and self.override.strip():
            self._cached = self.override.strip()
            return self._cached
        for path in self.secret_paths:
            if not os.path.exists(path):
                continue
            key = read_secret_file(path)
            if key:
                logger.info("API key loaded from %s", path)
                self._cached = key
                return key
        return None

    def set_override(self, value: Optional[str]) -> None:
        self.override = value
        self._cached = None
