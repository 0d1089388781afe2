"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Set, Tuple

from tokendi.domain import CircularDependencyError, IScope, Lifetime, Registration, Token

# Scoped builds are keyed by (token, scope); every other lifetime by (token, None).
BuildKey = Tuple[Token, Optional[IScope]]


class CircularDependencyDetector:
    """Detects a build re-entering itself before it completes.

    Each thread keeps the ordered keys of the builds it has in progress plus
    a set of the same keys for membership checks. A scoped token is keyed by
    the scope it is built in, so building it in one scope while the same
    token is being built for another scope is not a cycle. Singleton and
    per-request tokens are keyed by the token alone.

    Attributes:
        _local: Thread-local storage for in-progress builds.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _state(self) -> Tuple[List[BuildKey], Set[BuildKey]]:
        if not hasattr(self._local, "keys"):
            self._local.keys = []
            self._local.in_progress = set()
        return self._local.keys, self._local.in_progress

    @staticmethod
    def build_key(registration: Registration, scope: Optional[IScope]) -> BuildKey:
        if registration.lifetime == Lifetime.SCOPED:
            return registration.token, scope
        return registration.token, None

    def enter(self, registration: Registration, scope: Optional[IScope] = None) -> None:
        """Mark a build as in progress on the current thread.

        Raises:
            CircularDependencyError: If the same build is already in progress.
                The chain runs from its first occurrence back to itself.
        """
        keys, in_progress = self._state()
        key = self.build_key(registration, scope)

        if key in in_progress:
            cycle = [token for token, _ in keys[keys.index(key) :]]
            raise CircularDependencyError(cycle + [registration.token])

        keys.append(key)
        in_progress.add(key)

    def leave(self) -> None:
        """Mark the most recent build on the current thread as finished."""
        keys, in_progress = self._state()
        if keys:
            in_progress.discard(keys.pop())

    @contextmanager
    def track(self, registration: Registration, scope: Optional[IScope] = None) -> Iterator[None]:
        """Keep the build in progress for the duration of the block.

        Example:
            >>> with detector.track(registration, scope):
            ...     instance = build(registration)
        """
        self.enter(registration, scope)
        try:
            yield
        finally:
            self.leave()

    def in_progress(self) -> List[Token]:
        """Tokens being built on the current thread, outermost first."""
        keys, _ = self._state()
        return [token for token, _ in keys]

    def clear(self) -> None:
        """Forget every in-progress build on the current thread."""
        keys, in_progress = self._state()
        keys.clear()
        in_progress.clear()
