"""
Timezone store for Timezone Bot.

Keeps the user id -> IANA timezone mapping in memory and mirrors it to a
single JSON file. Every mutation is expected to be followed by ``save()``;
the file is rewritten in full each time.
"""
import json
from pathlib import Path
from typing import Dict, Optional, Union

import config
from core.logging import get_logger
from core.storage import read_json, write_json_atomic

logger = get_logger(__name__)

UserId = Union[int, str]


class TimezoneStore:
    """In-memory timezone mapping with whole-file JSON persistence."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or config.TIMEZONES_FILE)
        self._timezones: Dict[str, str] = {}

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self) -> Dict[str, str]:
        """
        Hydrate the store from disk.

        A missing file is created empty. An unreadable or malformed file is
        logged and replaced by an empty mapping. Never raises.

        Returns:
            A copy of the loaded mapping.
        """
        try:
            raw = read_json(self.path)
        except FileNotFoundError:
            logger.info(f"No existing timezones file at {self.path}, creating new one")
            self._timezones = {}
            self.save()
            return self.as_dict()
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Error reading timezones file {self.path}: {e}")
            self._timezones = {}
            self.save()
            return self.as_dict()

        if not isinstance(raw, dict):
            logger.error(f"Timezones file {self.path} is not a JSON object, starting empty")
            self._timezones = {}
            self.save()
            return self.as_dict()

        timezones = {}
        for user_id, timezone in raw.items():
            if isinstance(timezone, str):
                timezones[str(user_id)] = timezone
            else:
                logger.warning(f"Dropping malformed timezone entry for user {user_id}: {timezone!r}")

        self._timezones = timezones
        logger.info(f"Loaded timezone data for {len(self._timezones)} users")
        return self.as_dict()

    def save(self, mapping: Optional[Dict[str, str]] = None) -> bool:
        """
        Write the full mapping to disk.

        Args:
            mapping: Replace the in-memory mapping with this one before writing.

        Returns:
            True if the file was written.
        """
        if mapping is not None:
            self._timezones = {str(k): v for k, v in mapping.items()}

        try:
            write_json_atomic(self.path, self._timezones)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving timezones to {self.path}: {e}")
            return False

    # =========================================================================
    # Access
    # =========================================================================

    def get(self, user_id: UserId) -> Optional[str]:
        return self._timezones.get(str(user_id))

    def set(self, user_id: UserId, timezone: str) -> None:
        """Upsert a user's timezone. Call ``save()`` afterwards to persist."""
        self._timezones[str(user_id)] = timezone

    def as_dict(self) -> Dict[str, str]:
        return dict(self._timezones)

    def __contains__(self, user_id: UserId) -> bool:
        return str(user_id) in self._timezones

    def __len__(self) -> int:
        return len(self._timezones)
