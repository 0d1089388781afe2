"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .container import Container
from .lifetime_manager import LifetimeManager
from .registry import Registry
from .resolver import DependencyResolver
from .scope import Scope

__all__ = [
    "Container",
    "Registry",
    "Scope",
    "DependencyResolver",
    "LifetimeManager",
    "CircularDependencyDetector",
]
