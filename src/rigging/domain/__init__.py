"""
Domain layer - Core models, markers and error types.

This layer contains the value objects and contracts shared by the registries.
It has no dependencies on other layers.
"""

from .enums import BindingKind
from .exceptions import (
    AmbiguousConstructorError,
    DispatchError,
    DuplicateBindingError,
    NoEligibleConstructorError,
    RiggingError,
    UnresolvedDependencyError,
)
from .interfaces import Advice, IComponentRegistry, IInterceptorRegistry, Interceptor, Invocation, IProviderFactory
from .markers import Inject, Marker, find_marker, has_marker, inject, markers_of
from .models import (
    NO_RESULT,
    Arguments,
    Binding,
    ConstructorDescriptor,
    Operation,
    ParameterDescriptor,
    PropertyDescriptor,
)

__all__ = [
    # Enums
    "BindingKind",
    # Exceptions
    "RiggingError",
    "DuplicateBindingError",
    "AmbiguousConstructorError",
    "NoEligibleConstructorError",
    "UnresolvedDependencyError",
    "DispatchError",
    # Interfaces
    "IComponentRegistry",
    "IProviderFactory",
    "IInterceptorRegistry",
    "Advice",
    "Interceptor",
    "Invocation",
    # Markers
    "Marker",
    "Inject",
    "inject",
    "markers_of",
    "find_marker",
    "has_marker",
    # Models
    "Binding",
    "ParameterDescriptor",
    "ConstructorDescriptor",
    "PropertyDescriptor",
    "Operation",
    "Arguments",
    "NO_RESULT",
]
