from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence


class KeyValueStorage(Protocol):
    """Durable string key-value storage.

    Each multi_* call is a single batch: it either applies fully or raises PersistenceError.
    """

    def multi_get(self, keys: Sequence[str]) -> Mapping[str, Optional[str]]:
        raise NotImplementedError

    def multi_set(self, items: Mapping[str, str]) -> None:
        raise NotImplementedError

    def multi_remove(self, keys: Sequence[str]) -> None:
        raise NotImplementedError
