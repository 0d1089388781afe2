import logging
import threading
from typing import Any, Callable, Dict, Optional

from tokendi.domain import (
    ILifetimeManager,
    IScope,
    Lifetime,
    LifetimeError,
    NoActiveScopeError,
    Registration,
    Token,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class LifetimeManager(ILifetimeManager):
    """Manages instance lifetimes for singleton, scoped, and per-request tokens.

    Owns the container's singleton cache. Scoped instances live in the scope
    passed to each call, never here.

    Attributes:
        _singleton_cache: Cache for singleton instances.
        _lock: Re-entrant lock guarding singleton check-and-build.
    """

    def __init__(self) -> None:
        """Initialize the lifetime manager with an empty singleton cache."""
        self._singleton_cache: Dict[Token, Any] = {}
        # Re-entrant: building a singleton resolves its own singleton dependencies.
        self._lock = threading.RLock()

    def get_or_create(
        self,
        registration: Registration,
        scope: Optional[IScope],
        factory: Callable[[], Any],
    ) -> Any:
        """Get existing instance or create new one based on lifetime.

        Args:
            registration: Registration containing lifetime info.
            scope: The active scope, required for scoped lifetimes.
            factory: Function to create new instance if needed.

        Returns:
            Instance according to lifetime rules:
            - Singleton: Returns cached instance or creates and caches new one
            - Scoped: Returns instance cached in ``scope`` or creates one there
            - Per-request: Always creates new instance

        Raises:
            NoActiveScopeError: If a scoped token is requested without a scope.
            LifetimeError: If the lifetime is not one the manager knows.

        Example:
            >>> registration = Registration(token=StorageToken, factory=Storage, lifetime=Lifetime.SINGLETON)
            >>> instance = manager.get_or_create(registration, None, Storage)
        """
        lifetime = registration.lifetime
        token = registration.token

        if lifetime == Lifetime.SINGLETON:
            cached = self._singleton_cache.get(token, _MISSING)
            if cached is not _MISSING:
                return cached
            with self._lock:
                # Another thread may have finished the build while we waited.
                if token not in self._singleton_cache:
                    logger.debug("Building singleton %r", token)
                    self._singleton_cache[token] = factory()
                return self._singleton_cache[token]

        if lifetime == Lifetime.SCOPED:
            if scope is None:
                raise NoActiveScopeError(token)
            return scope.get_or_build(token, factory)

        if lifetime == Lifetime.PER_REQUEST:
            return factory()

        raise LifetimeError(f"Unsupported lifetime {lifetime!r} for {token!r}")

    def is_cached(self, token: Token) -> bool:
        return token in self._singleton_cache

    @property
    def singleton_count(self) -> int:
        return len(self._singleton_cache)

    def evict(self, token: Token) -> None:
        """Drop the cached singleton for a token so the next resolution rebuilds it."""
        with self._lock:
            if self._singleton_cache.pop(token, _MISSING) is not _MISSING:
                logger.debug("Evicted singleton %r", token)

    def clear_cache(self) -> None:
        """Clear all cached singleton instances.

        Useful for testing or resetting container state.
        """
        with self._lock:
            self._singleton_cache.clear()

