"""Persisted pairing token for a paired TV."""

from __future__ import annotations

import json
import logging
from pathlib import Path

_LOGGER = logging.getLogger(__name__)

DEFAULT_CREDENTIALS_PATH = Path.home() / ".lgtv-remote.json"
CLIENT_KEY_SETTING = "clientKey"


class CredentialStore:
    """Load and save the client key issued by the TV during pairing.

    The file holds ``{"clientKey": "<token>"}`` and nothing else. A missing
    file is the normal first-run state and yields no key.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_CREDENTIALS_PATH

    def load(self) -> str | None:
        """Return the stored client key, or None."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as err:
            _LOGGER.warning("Failed to read credentials from %s: %s", self.path, err)
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as err:
            _LOGGER.warning("Ignoring invalid credentials file %s: %s", self.path, err)
            return None

        if not isinstance(data, dict):
            _LOGGER.warning("Ignoring credentials file %s: not an object", self.path)
            return None

        client_key = data.get(CLIENT_KEY_SETTING)
        return client_key if isinstance(client_key, str) and client_key else None

    def save(self, client_key: str | None) -> bool:
        """Persist the client key.

        Returns:
            True if written, False if the file could not be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({CLIENT_KEY_SETTING: client_key}, indent=2),
                encoding="utf-8",
            )
        except OSError as err:
            _LOGGER.error("Failed to save credentials to %s: %s", self.path, err)
            return False
        _LOGGER.debug("Credentials saved to %s", self.path)
        return True
