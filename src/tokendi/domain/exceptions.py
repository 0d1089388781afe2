from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from tokendi.domain.models import Token


class DIException(Exception):
    """Base exception for DI-related errors."""


class NotRegisteredError(DIException):
    """Raised when a token has no registration in the container.

    Attributes:
        token: The token that was requested.
    """

    def __init__(self, token: "Token") -> None:
        self.token = token
        super().__init__(f"Dependency not registered: {token!r}")


class ScopeError(DIException):
    """Raised for invalid scope operations.

    This occurs when:
    - Resolving through a scope that has already been closed.
    - Asking for the request scope when no middleware created one.
    """


class NoActiveScopeError(ScopeError):
    """Raised when a scoped token is resolved without a scope.

    Attributes:
        token: The scoped token that was requested.
    """

    def __init__(self, token: "Token") -> None:
        self.token = token
        super().__init__(f"Cannot resolve scoped dependency {token!r} outside of a scope")


class CircularDependencyError(DIException):
    """Raised when building a token re-enters itself before completion.

    Attributes:
        dependency_chain: Tokens involved in the cycle, first and last being the same.
    """

    def __init__(self, dependency_chain: Sequence["Token"]) -> None:
        self.dependency_chain = list(dependency_chain)
        message = f"Circular dependency detected: {' -> '.join(token.name for token in self.dependency_chain)}"
        super().__init__(message)


class LifetimeError(DIException):
    """Raised for a lifetime value the container does not know how to honor."""
