import inspect
from typing import Any, Callable, Dict, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from rigging.domain.enums import BindingKind
from rigging.domain.markers import Marker


class Binding(BaseModel):
    """Value object representing a contract bound to its provider.

    Attributes:
        contract: The contract type used as the lookup key.
        provider: Zero-argument factory returning an instance of the contract.
        kind: How the binding was created.
        implementation: Implementation class, for bindings derived from a class.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    contract: Any = Field(..., description="The contract type used as the lookup key.")
    provider: Callable[[], Any] = Field(..., description="Zero-argument factory producing the contract instance.")
    kind: BindingKind = Field(..., description="How the binding was created.")
    implementation: Optional[Type] = Field(
        default=None,
        description="Implementation class the provider was derived from, if any.",
    )


class ParameterDescriptor(BaseModel):
    """Describes one parameter of a constructor.

    Attributes:
        name: Parameter name.
        annotation: Resolved type hint, the raw string when a forward reference
            could not be resolved, or None when the parameter is not annotated.
        kind: The inspect.Parameter kind of the parameter.
        has_default: Whether the parameter declares a default value.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    annotation: Optional[Any] = None
    kind: inspect._ParameterKind = inspect.Parameter.POSITIONAL_OR_KEYWORD
    has_default: bool = False

    @property
    def positional_only(self) -> bool:
        """Whether the argument must be passed positionally."""
        return self.kind is inspect.Parameter.POSITIONAL_ONLY


class ConstructorDescriptor(BaseModel):
    """Describes a way to build instances of a class.

    Attributes:
        name: "__init__" or the name of a classmethod factory.
        factory: Callable producing the instance from the parameters.
        parameters: Parameters in signature order, without self/cls and variadics.
        injectable: Whether the constructor carries the injection marker.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    factory: Callable[..., Any]
    parameters: Tuple[ParameterDescriptor, ...] = ()
    injectable: bool = False

    @property
    def required_parameters(self) -> Tuple[ParameterDescriptor, ...]:
        """Parameters the caller has to supply."""
        return tuple(parameter for parameter in self.parameters if not parameter.has_default)


class PropertyDescriptor(BaseModel):
    """Read/write accessor pair of a class.

    Attributes:
        name: Property name.
        getter: Read accessor, if any.
        setter: Write accessor, if any.
        annotation: Declared type, from the setter value hint or the getter return hint.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    getter: Optional[Callable[..., Any]] = None
    setter: Optional[Callable[..., Any]] = None
    annotation: Optional[Any] = None


class Operation(BaseModel):
    """Describes an operation invoked through a dispatch proxy.

    Attributes:
        contract: The contract declaring the operation.
        name: The operation name.
        function: The function declared on the contract.
        markers: Markers attached to the declaration, in declared order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    contract: Any
    name: str
    function: Callable[..., Any]
    markers: Tuple[Marker, ...] = ()


class Arguments(BaseModel):
    """Arguments of an intercepted call.

    Attributes:
        args: Positional arguments, without the receiver.
        kwargs: Keyword arguments.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = Field(default_factory=dict)

    def replace(self, *args: Any, **kwargs: Any) -> "Arguments":
        """Return new arguments for the inner chain.

        Example:
            >>> def double_first(target, operation, arguments, proceed):
            ...     first, *rest = arguments.args
            ...     return proceed(target, operation, arguments.replace(first * 2, *rest))
        """
        return Arguments(args=args, kwargs=kwargs)


class _NoResult:
    """Result passed to advice after-hooks when the call raised."""

    _instance: Optional["_NoResult"] = None

    def __new__(cls) -> "_NoResult":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_RESULT"

    def __bool__(self) -> bool:
        return False


NO_RESULT = _NoResult()
