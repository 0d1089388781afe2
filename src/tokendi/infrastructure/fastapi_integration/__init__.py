"""
FastAPI integration module.

Provides helpers for resolving tokens inside FastAPI endpoints, with one
scope per HTTP request.
"""

from .integration import (
    ScopedContainerMiddleware,
    create_fastapi_dependency,
    create_scoped_dependency,
    get_request_scope,
)

__all__ = [
    "create_fastapi_dependency",
    "create_scoped_dependency",
    "get_request_scope",
    "ScopedContainerMiddleware",
]
