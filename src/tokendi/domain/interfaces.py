from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence, TypeVar

from tokendi.domain.enums import Lifetime
from tokendi.domain.models import Registration, Token

T = TypeVar("T")


class IScope(ABC):
    """Abstract interface for an isolated resolution context."""

    @abstractmethod
    def resolve(self, token: Token[T]) -> T:
        """Resolve a token within this scope.

        Args:
            token: The token to resolve.
        """

    @abstractmethod
    def get_or_build(self, token: Token, create: Callable[[], Any]) -> Any:
        """Return the cached instance for ``token``, building it once if missing.

        Args:
            token: The token to look up.
            create: Callable building the instance on a cache miss.
        """

    @abstractmethod
    def clear(self) -> None:
        """Drop every instance cached in this scope."""

    @abstractmethod
    def close(self) -> None:
        """Clear the scope and reject further resolutions through it."""


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def register(
        self,
        token: Token[T],
        builder: Callable[..., T],
        lifetime: Optional[Lifetime] = None,
        dependencies: Sequence[Token] = (),
        params: Sequence[Any] = (),
    ) -> None:
        """Register a constructor-style recipe for a token.

        Args:
            token: The token to register.
            builder: Callable invoked with resolved dependencies followed by params.
            lifetime: Lifetime of built instances.
            dependencies: Tokens resolved in order and passed first to the builder.
            params: Literal values appended after the resolved dependencies.
        """

    @abstractmethod
    def register_factory(
        self,
        token: Token[T],
        factory: Callable[[], T],
        lifetime: Optional[Lifetime] = None,
    ) -> None:
        """Register a zero-argument factory for a token.

        Args:
            token: The token to register.
            factory: Callable producing the instance.
            lifetime: Lifetime of produced instances.
        """

    @abstractmethod
    def resolve(self, token: Token[T], scope: Optional[IScope] = None) -> T:
        """Resolve and return an instance for the token.

        Args:
            token: The token to resolve.
            scope: Optional scope used for scoped lifetimes.
        """

    @abstractmethod
    def create_scope(self) -> IScope:
        """Create and return a new, empty scope bound to this container."""

    @abstractmethod
    def clear(self) -> None:
        """Clear all registrations and cached singletons from the container."""

    @abstractmethod
    def get_registry_copy(self) -> Dict[Token, Registration]:
        """Get a copy of the current registrations."""


class IResolver(ABC):
    """Abstract interface for building an instance from a registration."""

    @abstractmethod
    def build(self, registration: Registration, resolve: Callable[[Token], Any]) -> Any:
        """Build a new instance from a registration.

        Args:
            registration: The recipe to execute.
            resolve: Callback resolving dependency tokens in the caller's scope.

        Returns:
            The newly built instance.
        """


class ILifetimeManager(ABC):
    """Abstract interface for managing instance lifetimes."""

    @abstractmethod
    def get_or_create(
        self,
        registration: Registration,
        scope: Optional[IScope],
        factory: Callable[[], Any],
    ) -> Any:
        """Get an existing instance or create a new one based on lifetime.

        Args:
            registration: The registration containing lifetime info.
            scope: The active scope, if any.
            factory: A callable to create a new instance if needed.
        """

    @abstractmethod
    def evict(self, token: Token) -> None:
        """Drop the cached instance for a token, if any.

        Args:
            token: The token whose registration was replaced.
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear any cached instances managed by this lifetime manager."""
