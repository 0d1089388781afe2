import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, TypeVar

from tokendi.domain import IScope, ScopeError, Token

if TYPE_CHECKING:
    from tokendi.domain import IContainer

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Scope(IScope):
    """Isolated resolution context handed out by ``Container.create_scope``.

    Every scoped token resolved through the same scope yields the same
    instance; another scope builds its own. Singletons are still shared with
    the container. The container keeps no reference to the scope, so the
    creator decides when it ends.

    Check-and-build of scoped instances is serialized by a re-entrant lock,
    so a scope handed to several threads still builds each token once.

    Attributes:
        _container: The container registrations are resolved against.
        _instances: Scoped instances built within this scope.
        _closed: Whether the scope has been closed.

    Example:
        >>> with container.create_scope() as scope:
        ...     processor1 = scope.resolve(ProcessorToken)
        ...     processor2 = scope.resolve(ProcessorToken)
        ...     assert processor1 is processor2
    """

    def __init__(self, container: "IContainer") -> None:
        self._container = container
        self._instances: Dict[Token, Any] = {}
        self._lock = threading.RLock()
        self._closed = False

    def resolve(self, token: Token[T]) -> T:
        """Resolve a token with this scope as the active scope.

        Raises:
            ScopeError: If the scope has been closed.
        """
        if self._closed:
            raise ScopeError(f"Cannot resolve {token!r} through a closed scope")
        return self._container.resolve(token, scope=self)

    def get_or_build(self, token: Token, create: Callable[[], Any]) -> Any:
        with self._lock:
            if token not in self._instances:
                logger.debug("Building scoped %r", token)
                self._instances[token] = create()
            return self._instances[token]

    @property
    def closed(self) -> bool:
        return self._closed

    def clear(self) -> None:
        """Drop every scoped instance cached in this scope."""
        with self._lock:
            self._instances.clear()

    def close(self) -> None:
        """Clear the scope and reject further resolutions through it."""
        self.clear()
        self._closed = True

    def __contains__(self, token: object) -> bool:
        return token in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __enter__(self) -> "Scope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> Optional[bool]:
        self.close()
        return False
