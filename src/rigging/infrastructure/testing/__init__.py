"""
Testing utilities module.

Provides helpers and utilities for testing applications using rigging.
"""

from .utilities import RecordedCall, RecordingInterceptor, TestRegistry, create_mock_registry

__all__ = [
    "TestRegistry",
    "create_mock_registry",
    "RecordedCall",
    "RecordingInterceptor",
]
