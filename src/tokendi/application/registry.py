"""Application layer - Token registry."""

import logging
from typing import Any, Callable, Dict, Iterator, List, Sequence

from tokendi.domain import Lifetime, NotRegisteredError, Registration, Token

logger = logging.getLogger(__name__)


class Registry:
    """Stores registrations keyed by token.

    Re-registering a token replaces the previous registration entirely.
    Registration is expected to finish before concurrent resolution starts.

    Attributes:
        _registrations: Dictionary mapping tokens to their registration.
    """

    def __init__(self) -> None:
        self._registrations: Dict[Token, Registration] = {}

    def _store(self, registration: Registration) -> None:
        if registration.token in self._registrations:
            logger.debug("Overwriting registration for %r", registration.token)
        self._registrations[registration.token] = registration

    @staticmethod
    def _check_token(token: Any) -> None:
        if not isinstance(token, Token):
            raise TypeError(f"Registrations must be keyed by a Token, got {type(token).__name__}")

    def register(
        self,
        token: Token,
        builder: Callable[..., Any],
        lifetime: Lifetime = Lifetime.PER_REQUEST,
        dependencies: Sequence[Token] = (),
        params: Sequence[Any] = (),
    ) -> Registration:
        """Store a constructor-style registration.

        The builder's arity is not checked against the declared dependencies
        and params; a mismatch surfaces when the token is first built.

        Args:
            token: The token to register.
            builder: Callable receiving resolved dependencies then params.
            lifetime: Lifetime of built instances.
            dependencies: Ordered dependency tokens.
            params: Ordered literal parameters.

        Returns:
            The stored registration.
        """
        self._check_token(token)
        registration = Registration(
            token=token,
            lifetime=lifetime,
            builder=builder,
            dependencies=tuple(dependencies),
            params=tuple(params),
        )
        self._store(registration)
        return registration

    def register_factory(
        self,
        token: Token,
        factory: Callable[[], Any],
        lifetime: Lifetime = Lifetime.PER_REQUEST,
    ) -> Registration:
        """Store a factory-style registration.

        Args:
            token: The token to register.
            factory: Zero-argument callable producing the instance.
            lifetime: Lifetime applied around the factory's result.

        Returns:
            The stored registration.
        """
        self._check_token(token)
        registration = Registration(token=token, lifetime=lifetime, factory=factory)
        self._store(registration)
        return registration

    def lookup(self, token: Token) -> Registration:
        """Return the registration for a token.

        Raises:
            NotRegisteredError: If the token was never registered.
        """
        try:
            return self._registrations[token]
        except KeyError:
            raise NotRegisteredError(token) from None

    def unregister(self, token: Token) -> None:
        """Remove a token's registration.

        Raises:
            NotRegisteredError: If the token was never registered.
        """
        if token not in self._registrations:
            raise NotRegisteredError(token)
        del self._registrations[token]

    def tokens(self) -> List[Token]:
        return list(self._registrations)

    def copy(self) -> Dict[Token, Registration]:
        return self._registrations.copy()

    def replace_all(self, registrations: Dict[Token, Registration]) -> None:
        self._registrations = dict(registrations)

    def clear(self) -> None:
        self._registrations.clear()

    def __contains__(self, token: object) -> bool:
        return token in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._registrations)
