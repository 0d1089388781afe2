import logging
from contextlib import nullcontext
from typing import Any, Callable, Dict, Optional, Sequence, TypeVar

from tokendi.application.circular_detector import CircularDependencyDetector
from tokendi.application.lifetime_manager import LifetimeManager
from tokendi.application.registry import Registry
from tokendi.application.resolver import DependencyResolver
from tokendi.application.scope import Scope
from tokendi.domain import (
    ContainerSettings,
    IContainer,
    ILifetimeManager,
    IResolver,
    IScope,
    Lifetime,
    Registration,
    Token,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Main dependency injection container.

    Orchestrates registration and resolution of tokens using domain objects.
    Supports per-request, scoped, and singleton lifetimes. Every mapping from
    token to recipe is explicit; nothing is discovered from type hints.

    Attributes:
        _settings: Container configuration.
        _registry: Registrations keyed by token.
        _resolver: Component executing registration recipes.
        _lifetime_manager: Component managing instance lifetimes.
        _circular_detector: Component detecting circular dependencies.
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        """Initialize the container with an empty registry and singleton cache.

        Args:
            settings: Optional configuration; defaults to ``ContainerSettings()``.
        """
        self._settings = settings or ContainerSettings()
        self._registry = Registry()
        self._resolver: IResolver = DependencyResolver()
        self._lifetime_manager: ILifetimeManager = LifetimeManager()
        self._circular_detector = CircularDependencyDetector()

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    def register(
        self,
        token: Token[T],
        builder: Callable[..., T],
        lifetime: Optional[Lifetime] = None,
        dependencies: Sequence[Token] = (),
        params: Sequence[Any] = (),
    ) -> None:
        """Register a constructor-style recipe for a token.

        On resolution each dependency token is resolved in order, then the
        builder is called with those instances followed by ``params``.
        Registering the same token again replaces the previous recipe
        and drops any singleton already built from it.

        Args:
            token: The token to register.
            builder: Callable invoked with resolved dependencies followed by params.
            lifetime: Lifetime of built instances; defaults to the configured default.
            dependencies: Ordered dependency tokens.
            params: Ordered literal parameters.

        Example:
            >>> container.register(StorageToken, FileStorage, Lifetime.SINGLETON, params=["prod.db"])
            >>> container.register(
            ...     ProcessorToken,
            ...     AdvancedProcessor,
            ...     Lifetime.SCOPED,
            ...     dependencies=[LoggerToken, StorageToken],
            ... )
        """
        registration = self._registry.register(
            token,
            builder,
            lifetime or self._settings.default_lifetime,
            dependencies,
            params,
        )
        self._lifetime_manager.evict(token)
        logger.debug(
            "Registered %r as %s with %d dependencies",
            token,
            registration.lifetime,
            len(registration.dependencies),
        )

    def register_factory(
        self,
        token: Token[T],
        factory: Callable[[], T],
        lifetime: Optional[Lifetime] = None,
    ) -> None:
        """Register a zero-argument factory for a token.

        The factory captures its own collaborators; no dependency tokens are
        resolved for it. Scoped and singleton lifetimes still cache its result.

        Args:
            token: The token to register.
            factory: Callable producing the instance.
            lifetime: Lifetime of produced instances; defaults to the configured default.

        Example:
            >>> container.register_factory(StorageToken, lambda: DatabaseStorage(), Lifetime.SINGLETON)
        """
        registration = self._registry.register_factory(token, factory, lifetime or self._settings.default_lifetime)
        self._lifetime_manager.evict(token)
        logger.debug("Registered factory for %r as %s", token, registration.lifetime)

    def resolve(self, token: Token[T], scope: Optional[IScope] = None) -> T:
        """Resolve and return an instance for the token.

        Dependencies are resolved recursively with the same ``scope``, so a
        scoped token deep in the graph shares the caller's scope. Errors from
        builders and factories propagate unchanged.

        Args:
            token: The token to resolve.
            scope: Scope for scoped lifetimes; ``None`` resolves outside any scope.

        Returns:
            Instance for the token.

        Raises:
            NotRegisteredError: If the token has no registration.
            NoActiveScopeError: If a scoped token is resolved without a scope.
            CircularDependencyError: If cycle detection is on and a token re-enters itself.

        Example:
            >>> storage = container.resolve(StorageToken)
        """
        registration = self._registry.lookup(token)

        def create() -> Any:
            return self._resolver.build(registration, lambda dependency: self.resolve(dependency, scope))

        if self._settings.detect_cycles:
            guard = self._circular_detector.track(registration, scope)
        else:
            guard = nullcontext()
        with guard:
            return self._lifetime_manager.get_or_create(registration, scope, create)

    def create_scope(self) -> Scope:
        """Create a new, empty scope bound to this container.

        Returns:
            Scope whose ``resolve`` uses it as the active scope.

        Example:
            >>> with container.create_scope() as scope:
            ...     ctx1 = scope.resolve(RequestContextToken)
            ...     ctx2 = scope.resolve(RequestContextToken)
            ...     assert ctx1 is ctx2
        """
        return Scope(self)

    def is_registered(self, token: Token) -> bool:
        return token in self._registry

    def get_registry_copy(self) -> Dict[Token, Registration]:
        """Get a copy of the registrations, e.g. to seed a test container.

        Returns:
            Copy of the current registry.
        """
        return self._registry.copy()

    def set_registry(self, registry: Dict[Token, Registration]) -> None:
        """Replace all registrations.

        Args:
            registry: Registrations to use from now on.
        """
        self._registry.replace_all(registry)

    def clear(self) -> None:
        """Clear all registrations and cached singletons.

        Useful for testing or resetting the container state.
        """
        self._registry.clear()
        self._lifetime_manager.clear_cache()
        self._circular_detector.clear()
