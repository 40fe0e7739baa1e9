from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar, get_type_hints

from rigging.application.introspection import eligible_constructors_of, injectable_properties_of
from rigging.domain import (
    AmbiguousConstructorError,
    ConstructorDescriptor,
    IComponentRegistry,
    IProviderFactory,
    NoEligibleConstructorError,
    ParameterDescriptor,
    UnresolvedDependencyError,
)

T = TypeVar("T")


class ProviderFactory(IProviderFactory):
    """Derives wiring providers from implementation classes.

    The constructor is selected and every dependency type is validated once, when
    the provider is created. Each provider call then resolves constructor
    parameters in signature order, builds the instance and injects the marked
    properties, all through the registry's lookup.
    """

    def create_provider(self, implementation: Type[T], registry: IComponentRegistry) -> Callable[[], T]:
        """Select the constructor of the implementation and return a wiring provider.

        Args:
            implementation: The class to build.
            registry: The registry used to resolve constructor and property dependencies.

        Returns:
            A zero-argument provider building a fully wired instance.

        Raises:
            AmbiguousConstructorError: If more than one constructor is marked for injection.
            NoEligibleConstructorError: If no constructor is marked and __init__ needs arguments.
            UnresolvedDependencyError: If a parameter or injectable property lacks a type hint,
                or its type hint cannot be resolved.

        Example:
            >>> class UserService:
            ...     @inject
            ...     def __init__(self, repository: UserRepository):
            ...         self.repository = repository
            >>>
            >>> provider = ProviderFactory().create_provider(UserService, registry)
            >>> service = provider()
        """
        constructor = self.select_constructor(implementation)
        parameters = self._constructor_dependencies(implementation, constructor)
        properties = injectable_properties_of(implementation)

        for descriptor in properties:
            if descriptor.annotation is None:
                raise UnresolvedDependencyError(
                    implementation,
                    f"Injectable property '{descriptor.name}' lacks a type hint.",
                )
            self._check_resolvable(
                implementation,
                f"Injectable property '{descriptor.name}'",
                descriptor.annotation,
                (descriptor.setter, descriptor.getter),
            )

        def provider() -> T:
            args: List[Any] = []
            kwargs: Dict[str, Any] = {}
            for parameter in parameters:
                value = registry.lookup(parameter.annotation)
                if parameter.positional_only:
                    args.append(value)
                else:
                    kwargs[parameter.name] = value

            instance = constructor.factory(*args, **kwargs)

            for descriptor in properties:
                descriptor.setter(instance, registry.lookup(descriptor.annotation))
            return instance

        return provider

    def select_constructor(self, implementation: Type) -> ConstructorDescriptor:
        """Pick the constructor used to build instances of a class.

        Args:
            implementation: The class to inspect.

        Returns:
            The only marked constructor, or __init__ when nothing is marked.

        Raises:
            AmbiguousConstructorError: If more than one constructor is marked.
            NoEligibleConstructorError: If nothing is marked and __init__ has required parameters.
        """
        constructors = eligible_constructors_of(implementation)
        marked = [constructor for constructor in constructors if constructor.injectable]

        if len(marked) > 1:
            raise AmbiguousConstructorError(implementation, [constructor.name for constructor in marked])
        if marked:
            return marked[0]

        init = constructors[0]
        if init.required_parameters:
            raise NoEligibleConstructorError(implementation)
        return init

    def _constructor_dependencies(
        self, implementation: Type, constructor: ConstructorDescriptor
    ) -> List[ParameterDescriptor]:
        # Parameters with defaults keep their default value
        dependencies = []
        for parameter in constructor.required_parameters:
            if parameter.annotation is None:
                raise UnresolvedDependencyError(
                    implementation,
                    f"Parameter '{parameter.name}' of {constructor.name} lacks type hint and has no default value.",
                )
            self._check_resolvable(
                implementation,
                f"Parameter '{parameter.name}' of {constructor.name}",
                parameter.annotation,
                (_constructor_function(implementation, constructor),),
            )
            dependencies.append(parameter)
        return dependencies

    def _check_resolvable(
        self,
        implementation: Type,
        subject: str,
        hint: Any,
        functions: Tuple[Optional[Callable], ...],
    ) -> None:
        # Forward references that could not be evaluated are kept as strings
        if not isinstance(hint, str):
            return
        reason = f"{subject} has type hint {hint!r} that cannot be resolved."
        for function in functions:
            if function is None:
                continue
            try:
                get_type_hints(function)
            except (NameError, TypeError) as e:
                raise UnresolvedDependencyError(implementation, reason) from e
        raise UnresolvedDependencyError(implementation, reason)


def _constructor_function(implementation: Type, constructor: ConstructorDescriptor) -> Callable:
    if constructor.name == "__init__":
        return implementation.__init__
    return getattr(constructor.factory, "__func__", constructor.factory)
