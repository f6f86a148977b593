from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_user_id
from ..core.constants import (
    CHECK_IN_TIMESTAMP_KEY,
    SHIFT_DURATION_KEY,
    SHIFT_END_TIMESTAMP_KEY,
    STORAGE_KEY_PREFIX,
)
from ..core.exceptions import PersistenceError
from ..storage.repository import KeyValueStorage
from .model import StoredSession

logger = logging.getLogger(__name__)


def user_storage_key(name: str, user_id: str) -> str:
    return f"{STORAGE_KEY_PREFIX}:{name}:{user_id}"


class SessionStore:
    """User-scoped persistence of the in-flight session.

    Storage failures are logged and reported through the return value instead of
    raising, so the in-memory session keeps working for the rest of the process.
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    @staticmethod
    def keys_for(user_id: str) -> tuple[str, str, str]:
        user_id = require_user_id(user_id)
        return (
            user_storage_key(CHECK_IN_TIMESTAMP_KEY, user_id),
            user_storage_key(SHIFT_END_TIMESTAMP_KEY, user_id),
            user_storage_key(SHIFT_DURATION_KEY, user_id),
        )

    def save(self, user_id: str, check_in_at: int, shift_end_at: int, shift_duration_seconds: int) -> bool:
        check_in_key, shift_end_key, duration_key = self.keys_for(user_id)
        try:
            self._storage.multi_set(
                {
                    check_in_key: str(int(check_in_at)),
                    shift_end_key: str(int(shift_end_at)),
                    duration_key: str(int(shift_duration_seconds)),
                }
            )
        except PersistenceError as e:
            logger.warning(f"Failed to persist check-in data for user {user_id}: {e}")
            return False
        return True

    def load(self, user_id: str) -> Optional[StoredSession]:
        keys = self.keys_for(user_id)
        try:
            values = self._storage.multi_get(list(keys))
        except PersistenceError as e:
            logger.warning(f"Failed to load persisted check-in data for user {user_id}: {e}")
            return None

        raw = [values.get(k) for k in keys]
        if not all(raw):
            return None
        try:
            check_in_at, shift_end_at, duration = (int(v) for v in raw)
        except ValueError:
            logger.warning(f"Ignoring unparsable session data for user {user_id}: {raw!r}")
            return None
        return StoredSession(check_in_at=check_in_at, shift_end_at=shift_end_at, shift_duration_seconds=duration)

    def clear(self, user_id: str) -> bool:
        try:
            self._storage.multi_remove(list(self.keys_for(user_id)))
        except PersistenceError as e:
            logger.warning(f"Failed to clear persisted data for user {user_id}: {e}")
            return False
        return True
