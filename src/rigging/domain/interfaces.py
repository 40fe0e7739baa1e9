from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Type, TypeVar

from rigging.domain.markers import Marker
from rigging.domain.models import Arguments, Binding, Operation

T = TypeVar("T")

# (target, operation, arguments) -> result
Invocation = Callable[[Any, Operation, Arguments], Any]

# (target, operation, arguments, proceed) -> result
Interceptor = Callable[[Any, Operation, Arguments, Invocation], Any]


class IComponentRegistry(ABC):
    """Abstract interface for binding contracts to providers and looking them up."""

    @abstractmethod
    def register_instance(self, contract: Type[T], instance: T) -> None:
        """Bind a contract to a constant instance.

        Args:
            contract: The contract type.
            instance: The instance returned by every lookup.
        """

    @abstractmethod
    def register_provider(self, contract: Type[T], provider: Callable[[], T]) -> None:
        """Bind a contract to a zero-argument factory.

        Args:
            contract: The contract type.
            provider: Factory invoked on every lookup.
        """

    @abstractmethod
    def register_provider_class(self, contract: Type[T], implementation: Type[T]) -> None:
        """Bind a contract to a provider derived from an implementation class.

        Args:
            contract: The contract type.
            implementation: Concrete class built and wired on every lookup.
        """

    @abstractmethod
    def lookup(self, contract: Type[T]) -> T:
        """Return a fresh product of the provider bound to the contract.

        Args:
            contract: The contract type to look up.
        """

    @abstractmethod
    def bindings(self) -> Dict[Any, Binding]:
        """Get a copy of the current bindings."""


class IProviderFactory(ABC):
    """Abstract interface for deriving providers from implementation classes."""

    @abstractmethod
    def create_provider(self, implementation: Type[T], registry: IComponentRegistry) -> Callable[[], T]:
        """Select the constructor of the implementation and return a wiring provider.

        Args:
            implementation: The class to build.
            registry: The registry used to resolve constructor and property dependencies.

        Returns:
            A zero-argument provider building a fully wired instance.

        Raises:
            AmbiguousConstructorError: If more than one constructor is marked for injection.
            NoEligibleConstructorError: If no constructor can be selected.
            UnresolvedDependencyError: If a dependency lacks a type hint.
        """


class Advice(ABC):
    """Paired hooks run around an intercepted call.

    Advices cannot alter control flow: the call always runs exactly once after all
    before-hooks. After-hooks always run, receiving NO_RESULT when the call raised.
    """

    @abstractmethod
    def before(self, target: Any, operation: Operation, arguments: Arguments) -> None:
        """Run before the call."""

    @abstractmethod
    def after(self, target: Any, operation: Operation, arguments: Arguments, result: Any) -> None:
        """Run after the call, even when it failed."""


class IInterceptorRegistry(ABC):
    """Abstract interface for interceptor registration and proxy creation."""

    @abstractmethod
    def add_interceptor(self, marker_type: Type[Marker], interceptor: Interceptor) -> None:
        """Append an interceptor to the list of a marker type.

        Args:
            marker_type: The marker type selecting the operations to intercept.
            interceptor: Callable receiving (target, operation, arguments, proceed).
        """

    @abstractmethod
    def add_advice(self, marker_type: Type[Marker], advice: Advice) -> None:
        """Append a before/after advice to the list of a marker type.

        Args:
            marker_type: The marker type selecting the operations to intercept.
            advice: The paired hooks.
        """

    @abstractmethod
    def interceptors_for(self, operation: Operation) -> List[Interceptor]:
        """Return the interceptors applicable to an operation, outermost first."""

    @abstractmethod
    def invoke(self, target: Any, operation: Operation, arguments: Arguments) -> Any:
        """Run an operation call through its invocation chain."""

    @abstractmethod
    def create_proxy(self, contract: Type[T], target: T) -> T:
        """Wrap a target behind a proxy implementing the contract.

        Args:
            contract: The contract implemented by the proxy.
            target: The instance receiving the real calls.
        """
