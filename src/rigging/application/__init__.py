"""
Application layer - Registries and orchestration.

This layer contains the registries that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .component_registry import ComponentRegistry
from .interceptor_registry import InterceptorRegistry, advice_interceptor
from .introspection import eligible_constructors_of, injectable_properties_of, properties_of
from .provider_factory import ProviderFactory
from .proxy import operations_of, proxy_class_for

__all__ = [
    "ComponentRegistry",
    "InterceptorRegistry",
    "ProviderFactory",
    "advice_interceptor",
    "properties_of",
    "eligible_constructors_of",
    "injectable_properties_of",
    "operations_of",
    "proxy_class_for",
]
