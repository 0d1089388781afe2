from typing import Any, Callable

from tokendi.domain import IResolver, Registration, Token


class DependencyResolver(IResolver):
    """Builds instances from registrations.

    Factory registrations are called with no arguments. Constructor-style
    registrations have their dependency tokens resolved in declared order
    and the builder is called with those instances followed by the literal
    params. Exceptions raised by a builder or factory propagate unchanged.
    """

    def build(self, registration: Registration, resolve: Callable[[Token], Any]) -> Any:
        """Execute a registration's recipe.

        Args:
            registration: The recipe to execute.
            resolve: Callback resolving a dependency token in the caller's scope.

        Returns:
            The newly built instance.

        Example:
            >>> registration = Registration(
            ...     token=ProcessorToken,
            ...     builder=Processor,
            ...     dependencies=(LoggerToken, StorageToken),
            ...     params=("prod",),
            ... )
            >>> resolver.build(registration, container.resolve)
            # Processor(<logger>, <storage>, "prod")
        """
        if registration.factory is not None:
            return registration.factory()

        resolved = [resolve(dependency) for dependency in registration.dependencies]
        return registration.builder(*resolved, *registration.params)
