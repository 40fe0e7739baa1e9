import logging
from typing import Any, Dict, List, Type, TypeVar

from rigging.application.proxy import new_proxy
from rigging.domain import (
    NO_RESULT,
    Advice,
    Arguments,
    IInterceptorRegistry,
    Interceptor,
    Invocation,
    Marker,
    Operation,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _call_target(target: Any, operation: Operation, arguments: Arguments) -> Any:
    return getattr(target, operation.name)(*arguments.args, **arguments.kwargs)


def _wrap(interceptor: Interceptor, proceed: Invocation) -> Invocation:
    def invocation(target: Any, operation: Operation, arguments: Arguments) -> Any:
        return interceptor(target, operation, arguments, proceed)

    return invocation


def advice_interceptor(advice: Advice) -> Interceptor:
    """Adapt a before/after advice to an interceptor.

    The after-hook runs even when the inner chain raised, receiving NO_RESULT.
    """

    def intercept(target: Any, operation: Operation, arguments: Arguments, proceed: Invocation) -> Any:
        advice.before(target, operation, arguments)
        result = NO_RESULT
        try:
            result = proceed(target, operation, arguments)
            return result
        finally:
            advice.after(target, operation, arguments, result)

    return intercept


class InterceptorRegistry(IInterceptorRegistry):
    """Registry of interceptors keyed by marker type.

    Interceptors for a marker accumulate in registration order. Every call on a
    proxy builds a chain from the markers of the invoked operation, the first
    registered interceptor being the outermost one.

    Attributes:
        _interceptors: Dictionary mapping marker types to their interceptors.
    """

    def __init__(self) -> None:
        """Initialize the registry with no interceptors."""
        self._interceptors: Dict[Type[Marker], List[Interceptor]] = {}

    def add_interceptor(self, marker_type: Type[Marker], interceptor: Interceptor) -> None:
        """Append an interceptor to the list of a marker type.

        Registering the same interceptor twice makes it run twice.

        Args:
            marker_type: The marker type selecting the operations to intercept.
            interceptor: Callable receiving (target, operation, arguments, proceed).

        Raises:
            TypeError: If marker_type is not a Marker subclass or interceptor is not callable.

        Example:
            >>> def timed(target, operation, arguments, proceed):
            ...     start = time.perf_counter()
            ...     try:
            ...         return proceed(target, operation, arguments)
            ...     finally:
            ...         print(operation.name, time.perf_counter() - start)
            >>>
            >>> registry.add_interceptor(Timed, timed)
        """
        if not (isinstance(marker_type, type) and issubclass(marker_type, Marker)):
            raise TypeError(f"Marker type must be a Marker subclass, got {marker_type!r}")
        if not callable(interceptor):
            raise TypeError(f"Interceptor for {marker_type.__name__} must be callable")
        self._interceptors.setdefault(marker_type, []).append(interceptor)
        logger.debug("Added interceptor %r for marker %s", interceptor, marker_type.__name__)

    def add_advice(self, marker_type: Type[Marker], advice: Advice) -> None:
        """Append a before/after advice to the list of a marker type.

        Befores run in registration order, afters in reverse registration order,
        and afters still run when the call fails.

        Args:
            marker_type: The marker type selecting the operations to intercept.
            advice: The paired hooks.

        Raises:
            TypeError: If advice lacks callable before/after hooks.
        """
        if not (callable(getattr(advice, "before", None)) and callable(getattr(advice, "after", None))):
            raise TypeError(f"Advice for {getattr(marker_type, '__name__', marker_type)} needs before and after hooks")
        self.add_interceptor(marker_type, advice_interceptor(advice))

    def interceptors_for(self, operation: Operation) -> List[Interceptor]:
        """Return the interceptors applicable to an operation, outermost first.

        Args:
            operation: The invoked operation.

        Returns:
            Interceptors of each marker in declared order, each list in registration order.
        """
        return [
            interceptor
            for marker in operation.markers
            for interceptor in self._interceptors.get(type(marker), ())
        ]

    def invoke(self, target: Any, operation: Operation, arguments: Arguments) -> Any:
        """Run an operation call through its invocation chain.

        Args:
            target: The instance receiving the real call.
            operation: The invoked operation.
            arguments: The call arguments.

        Returns:
            The result of the outermost interceptor, or of the target without interceptors.
        """
        invocation: Invocation = _call_target
        for interceptor in reversed(self.interceptors_for(operation)):
            invocation = _wrap(interceptor, invocation)
        return invocation(target, operation, arguments)

    def create_proxy(self, contract: Type[T], target: T) -> T:
        """Wrap a target behind a proxy implementing the contract.

        Args:
            contract: The contract class implemented by the proxy.
            target: The instance receiving the real calls. The proxy does not own it.

        Returns:
            An instance of a generated subclass of the contract.

        Raises:
            ValueError: If target is None.
            TypeError: If contract is not a class.

        Example:
            >>> calculator = registry.create_proxy(Calculator, SimpleCalculator())
            >>> calculator.add(1, 2)  # runs the interceptors registered for add's markers
            3
        """
        if not isinstance(contract, type):
            raise TypeError(f"Contract must be a class, got {contract!r}")
        if target is None:
            raise ValueError(f"Target of a {contract.__name__} proxy must not be None")
        proxy = new_proxy(contract, target, self)
        logger.debug("Created %s proxy for %r", contract.__name__, target)
        return proxy
