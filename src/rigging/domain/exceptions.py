from typing import Any, List, Optional, Type


def _type_name(obj: Any) -> str:
    return getattr(obj, "__name__", repr(obj))


class RiggingError(Exception):
    """Base exception for registry and interception errors."""


class DuplicateBindingError(RiggingError):
    """Raised when a contract is bound a second time in the same registry.

    Attributes:
        contract: The contract type that is already bound.
    """

    def __init__(self, contract: Any) -> None:
        self.contract = contract
        super().__init__(f"Contract {_type_name(contract)} is already bound in this registry")


class AmbiguousConstructorError(RiggingError):
    """Raised when an implementation declares more than one injectable constructor.

    Attributes:
        implementation: The implementation class being registered.
        constructors: Names of the constructors carrying the injection marker.
    """

    def __init__(self, implementation: Type, constructors: List[str]) -> None:
        self.implementation = implementation
        self.constructors = constructors
        message = (
            f"More than one constructor of {_type_name(implementation)} is marked for injection: "
            f"{', '.join(constructors)}"
        )
        super().__init__(message)


class NoEligibleConstructorError(RiggingError):
    """Raised when an implementation has neither an injectable nor a no-argument constructor.

    Attributes:
        implementation: The implementation class being registered.
    """

    def __init__(self, implementation: Type) -> None:
        self.implementation = implementation
        super().__init__(
            f"{_type_name(implementation)} has no constructor marked for injection "
            "and its __init__ requires arguments"
        )


class UnresolvedDependencyError(RiggingError):
    """Raised when a contract cannot be resolved.

    This occurs when:
    - No provider is bound for the requested contract.
    - A constructor parameter or injectable property lacks a type hint.

    Attributes:
        contract: The contract (or implementation) that could not be resolved.
        reason: Optional reason for the failure.
    """

    def __init__(self, contract: Any, reason: Optional[str] = None) -> None:
        self.contract = contract
        self.reason = reason
        message = f"Cannot resolve dependency for type: {_type_name(contract)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class DispatchError(RiggingError, AttributeError):
    """Raised by a dispatch proxy asked for a name that is not an operation of its contract.

    Failures raised by the target or by an interceptor are never wrapped in this
    exception; they reach the proxy caller unchanged.

    Attributes:
        contract: The contract implemented by the proxy.
        name: The attribute name that was requested.
    """

    def __init__(self, contract: Type, name: str) -> None:
        super().__init__(f"'{name}' is not an operation of contract {_type_name(contract)}")
        self.contract = contract
        self.name = name
