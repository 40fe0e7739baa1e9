"""
FastAPI integration module.

Provides helpers and utilities for integrating rigging with FastAPI.
"""

from .integration import (
    RegistryMiddleware,
    create_fastapi_dependency,
    create_intercepted_dependency,
    create_request_dependency,
    inject_dependencies,
)

__all__ = [
    "create_fastapi_dependency",
    "create_intercepted_dependency",
    "create_request_dependency",
    "inject_dependencies",
    "RegistryMiddleware",
]
