import functools
import inspect
from typing import Any, Awaitable, Callable, Type, TypeVar

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from rigging.domain import IComponentRegistry, IInterceptorRegistry

T = TypeVar("T")


def create_fastapi_dependency(registry: IComponentRegistry, contract: Type[T]) -> Callable[[], T]:
    """Create a FastAPI Depends() callable that looks up a contract in the registry.

    The provider bound to the contract runs on every request; bind a constant
    instance to share one object between requests.

    Args:
        registry: The registry to look the contract up in.
        contract: The contract to look up when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> registry = ComponentRegistry()
        >>> registry.register_provider_class(UserRepository, SqlUserRepository)
        >>>
        >>> get_user_repo = create_fastapi_dependency(registry, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> T:
        """Look the contract up in the registry."""
        return registry.lookup(contract)

    return dependency


def create_intercepted_dependency(
    registry: IComponentRegistry, interceptors: IInterceptorRegistry, contract: Type[T]
) -> Callable[[], T]:
    """Create a FastAPI Depends() callable returning a proxy around the looked up instance.

    Args:
        registry: The registry to look the contract up in.
        interceptors: The interceptor registry wrapping the instance.
        contract: The contract to look up and to implement with the proxy.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> get_calculator = create_intercepted_dependency(registry, interceptors, Calculator)
        >>>
        >>> @app.get("/add")
        >>> async def add(a: int, b: int, calculator: Calculator = Depends(get_calculator)):
        ...     return {"sum": calculator.add(a, b)}
    """

    def dependency() -> T:
        """Look the contract up and wrap it behind its interceptors."""
        return interceptors.create_proxy(contract, registry.lookup(contract))

    return dependency


def create_request_dependency(contract: Type[T]) -> Callable[[Request], T]:
    """Create a FastAPI dependency that looks up a contract in the request's registry.

    Requires the RegistryMiddleware to be installed.

    Args:
        contract: The contract to look up.

    Returns:
        A callable that looks the contract up in the registry attached to the request.

    Example:
        >>> app.add_middleware(RegistryMiddleware, registry=registry)
        >>>
        >>> get_clock = create_request_dependency(Clock)
        >>>
        >>> @app.get("/now")
        >>> async def now(clock: Clock = Depends(get_clock)):
        ...     return {"now": clock.now()}
    """

    def request_dependency(request: Request) -> T:
        """Look the contract up in the request's registry."""
        if not hasattr(request.state, "registry"):
            raise RuntimeError(
                "Request does not have a component registry. Did you forget to add RegistryMiddleware?"
            )
        registry: IComponentRegistry = request.state.registry
        return registry.lookup(contract)

    return request_dependency


class RegistryMiddleware(BaseHTTPMiddleware):
    """Middleware that attaches a component registry to every request.

    The registry is accessible via `request.state.registry`.

    Attributes:
        registry: The registry attached to requests.

    Example:
        >>> app = FastAPI()
        >>> app.add_middleware(RegistryMiddleware, registry=registry)
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     greeter = request.state.registry.lookup(Greeter)
        ...     return {"message": greeter.greet("world")}
    """

    def __init__(self, app: FastAPI, registry: IComponentRegistry):
        """Initialize the middleware with a registry.

        Args:
            app: The FastAPI/Starlette application.
            registry: The registry attached to requests.
        """
        super().__init__(app)
        self.registry = registry

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the registry to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.registry = self.registry
        return await call_next(request)


def inject_dependencies(registry: IComponentRegistry, *contracts: Type[Any]) -> Callable:
    """Decorator that injects looked up contracts into an async endpoint function.

    The first parameters of the decorated function receive the contracts, in order,
    unless the caller passes them explicitly. They are removed from the signature
    FastAPI sees.

    Args:
        registry: The registry to look the contracts up in.
        *contracts: Contracts to look up and inject.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(registry, UserService, AuditLog)
        >>> async def list_users(user_service: UserService, audit: AuditLog):
        ...     audit.record("Listing users")
        ...     return await user_service.get_all()
    """

    def decorator(func: Callable) -> Callable:
        """Wrap the function with dependency injection logic."""
        signature = inspect.signature(func)
        parameters = list(signature.parameters.values())
        injected = {parameter.name: contract for parameter, contract in zip(parameters, contracts)}

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            """Look up the missing dependencies and call the original function."""
            for name, contract in injected.items():
                if name not in kwargs:
                    kwargs[name] = registry.lookup(contract)

            return await func(*args, **kwargs)

        wrapper.__signature__ = signature.replace(
            parameters=[parameter for parameter in parameters if parameter.name not in injected]
        )
        return wrapper

    return decorator
