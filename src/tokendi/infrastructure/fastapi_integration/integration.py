import logging
from typing import Awaitable, Callable, TypeVar

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from tokendi.domain import IContainer, IScope, ScopeError, Token

T = TypeVar("T")

logger = logging.getLogger(__name__)


def create_fastapi_dependency(container: IContainer, token: Token[T]) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that resolves a token from the container.

    Resolution happens outside any scope, so the token must be registered as
    per-request or singleton. Use ``create_scoped_dependency`` for scoped tokens.

    Args:
        container: The container to resolve from.
        token: The token to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.register(UserRepositoryToken, UserRepository, Lifetime.SINGLETON, [DatabaseToken])
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, UserRepositoryToken)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> T:
        """Resolve the token from the container."""
        return container.resolve(token)

    return dependency


def get_request_scope(request: Request) -> IScope:
    """Return the scope ScopedContainerMiddleware attached to the request.

    Raises:
        ScopeError: If the middleware is not installed.
    """
    scope = getattr(request.state, "di_scope", None)
    if scope is None:
        raise ScopeError("Request does not have a DI scope. Did you forget to add ScopedContainerMiddleware?")
    return scope


def create_scoped_dependency(token: Token[T]) -> Callable[[Request], T]:
    """Create a FastAPI dependency that resolves through the request's scope.

    Each request gets its own instance of scoped tokens. Requires the
    ScopedContainerMiddleware to be installed.

    Args:
        token: The token to resolve through the request scope.

    Returns:
        A callable that resolves from the request scope.

    Example:
        >>> app.add_middleware(ScopedContainerMiddleware, container=container)
        >>>
        >>> get_request_context = create_scoped_dependency(RequestContextToken)
        >>>
        >>> @app.get("/process")
        >>> async def process_request(ctx: RequestContext = Depends(get_request_context)):
        ...     return {"request_id": ctx.request_id}
    """

    def scoped_dependency(request: Request) -> T:
        """Resolve from the request's scope."""
        return get_request_scope(request).resolve(token)

    return scoped_dependency


class ScopedContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that opens a DI scope for each request.

    The scope is accessible via ``request.state.di_scope`` and is closed once
    the response has been produced.

    Attributes:
        container: The container to create scopes from.

    Example:
        >>> container = Container()
        >>> container.register(RequestContextToken, RequestContext, Lifetime.SCOPED)
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(ScopedContainerMiddleware, container=container)
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with a container.

        Args:
            app: The FastAPI/Starlette application.
            container: The container to create scopes from.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Open a scope for the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        scope = self.container.create_scope()
        request.state.di_scope = scope
        logger.debug("Opened DI scope for %s %s", request.method, request.url.path)

        try:
            response = await call_next(request)
            return response
        finally:
            scope.close()
            logger.debug("Closed DI scope for %s %s", request.method, request.url.path)
