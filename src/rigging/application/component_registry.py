import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from rigging.application.provider_factory import ProviderFactory
from rigging.domain import (
    Binding,
    BindingKind,
    DuplicateBindingError,
    IComponentRegistry,
    IProviderFactory,
    UnresolvedDependencyError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ComponentRegistry(IComponentRegistry):
    """Registry binding contract types to providers.

    Each contract has at most one provider. Lookups call the provider every time;
    register a constant instance to share a single object.

    Attributes:
        _bindings: Dictionary mapping contracts to their bindings.
        _provider_factory: Component deriving providers from implementation classes.
    """

    def __init__(self, provider_factory: Optional[IProviderFactory] = None) -> None:
        """Initialize the registry with no bindings.

        Args:
            provider_factory: Optional factory used by register_provider_class.
        """
        self._bindings: Dict[Any, Binding] = {}
        self._provider_factory: IProviderFactory = provider_factory or ProviderFactory()

    def _bind(self, binding: Binding) -> None:
        """Internal registration method with duplicate check.

        Raises:
            DuplicateBindingError: If the contract is already bound.
        """
        if binding.contract in self._bindings:
            raise DuplicateBindingError(binding.contract)
        self._bindings[binding.contract] = binding
        logger.debug("Bound %r to a %s provider", binding.contract, binding.kind)

    def register_instance(self, contract: Type[T], instance: T) -> None:
        """Bind a contract to a constant instance.

        Args:
            contract: The contract type.
            instance: The instance returned by every lookup.

        Raises:
            ValueError: If instance is None.
            DuplicateBindingError: If the contract is already bound.

        Example:
            >>> registry.register_instance(Greeter, EnglishGreeter())
            >>> registry.lookup(Greeter) is registry.lookup(Greeter)
            True
        """
        if instance is None:
            raise ValueError(f"Instance bound to {getattr(contract, '__name__', contract)} must not be None")
        self._bind(Binding(contract=contract, provider=lambda: instance, kind=BindingKind.INSTANCE))

    def register_provider(self, contract: Type[T], provider: Callable[[], T]) -> None:
        """Bind a contract to a zero-argument factory.

        The provider may call back into the registry to resolve its own dependencies.

        Args:
            contract: The contract type.
            provider: Factory invoked on every lookup.

        Raises:
            TypeError: If provider is not callable.
            DuplicateBindingError: If the contract is already bound.

        Example:
            >>> registry.register_provider(Clock, lambda: SystemClock(registry.lookup(TimeZone)))
        """
        if not callable(provider):
            raise TypeError(f"Provider for {getattr(contract, '__name__', contract)} must be callable")
        self._bind(Binding(contract=contract, provider=provider, kind=BindingKind.PROVIDER))

    def register_provider_class(self, contract: Type[T], implementation: Type[T]) -> None:
        """Bind a contract to a provider derived from an implementation class.

        The constructor is selected now; every lookup then builds a new instance,
        resolving constructor parameters and injectable properties from this registry.

        Args:
            contract: The contract type.
            implementation: Concrete class built and wired on every lookup.

        Raises:
            AmbiguousConstructorError: If more than one constructor is marked for injection.
            NoEligibleConstructorError: If no constructor can be selected.
            UnresolvedDependencyError: If a dependency lacks a type hint.
            DuplicateBindingError: If the contract is already bound.

        Example:
            >>> class ConsoleService(Service):
            ...     @inject
            ...     def __init__(self, greeter: Greeter):
            ...         self.greeter = greeter
            >>>
            >>> registry.register_provider_class(Service, ConsoleService)
        """
        if not isinstance(implementation, type):
            raise TypeError(f"Implementation must be a class, got {implementation!r}")
        if contract in self._bindings:
            raise DuplicateBindingError(contract)
        provider = self._provider_factory.create_provider(implementation, self)
        self._bind(
            Binding(
                contract=contract,
                provider=provider,
                kind=BindingKind.PROVIDER_CLASS,
                implementation=implementation,
            )
        )

    def provider_of(self, contract: Type[T]) -> Callable[[], T]:
        """Return the provider bound to a contract.

        Raises:
            UnresolvedDependencyError: If the contract is not bound.
        """
        binding = self._bindings.get(contract)
        if binding is None:
            raise UnresolvedDependencyError(contract, "No provider is registered for this type.")
        return binding.provider

    def lookup(self, contract: Type[T]) -> T:
        """Return a fresh product of the provider bound to the contract.

        Args:
            contract: The contract type to look up.

        Returns:
            Whatever the provider returns; it is not cached.

        Raises:
            UnresolvedDependencyError: If the contract, or one of its dependencies, is not bound.

        Example:
            >>> service = registry.lookup(Service)
        """
        return self.provider_of(contract)()

    def is_registered(self, contract: Any) -> bool:
        """Check whether a contract is bound."""
        return contract in self._bindings

    def bindings(self) -> Dict[Any, Binding]:
        """Get a copy of the current bindings.

        Returns:
            Copy of the contract to binding mapping.
        """
        return self._bindings.copy()
