# app/users/auth_cache.py
import logging
import time
from typing import Callable, Optional

from cachetools import TTLCache

from app.users.user_models.schemas import AuthContext

logger = logging.getLogger(__name__)


class AuthCache:
    """
    Resolved identities keyed by bearer token, dropped ``ttl_seconds`` after
    they were stored.

    Bounded by ``max_entries``; the least recently used token goes first when
    full. Expired tokens are swept on every insert. One instance lives on
    ``app.state``; tests build their own with a fake clock.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._entries: TTLCache = TTLCache(maxsize=max_entries, ttl=ttl_seconds, timer=clock)

    def get(self, token: str) -> Optional[AuthContext]:
        identity = self._entries.get(token)
        logger.debug(f"Auth cache {'hit' if identity is not None else 'miss'}")
        return identity

    def set(self, token: str, identity: AuthContext) -> None:
        self._entries[token] = identity

    def evict(self, token: str) -> None:
        self._entries.pop(token, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)
