"""
rigging: Marker-driven component registry and call interception.

Public API exports for the rigging package.
"""

# Application exports
from rigging.application import ComponentRegistry, InterceptorRegistry, eligible_constructors_of, properties_of

# Domain exports
from rigging.domain import (
    NO_RESULT,
    Advice,
    AmbiguousConstructorError,
    Arguments,
    DispatchError,
    DuplicateBindingError,
    Inject,
    Marker,
    NoEligibleConstructorError,
    Operation,
    RiggingError,
    UnresolvedDependencyError,
    inject,
)

__version__ = "0.1.0"

__all__ = [
    # Registries
    "ComponentRegistry",
    "InterceptorRegistry",
    # Introspection
    "properties_of",
    "eligible_constructors_of",
    # Markers
    "Marker",
    "Inject",
    "inject",
    # Interception
    "Advice",
    "Arguments",
    "Operation",
    "NO_RESULT",
    # Exceptions
    "RiggingError",
    "DuplicateBindingError",
    "AmbiguousConstructorError",
    "NoEligibleConstructorError",
    "UnresolvedDependencyError",
    "DispatchError",
]
