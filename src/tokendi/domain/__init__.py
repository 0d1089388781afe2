"""
Domain layer - Core models and rules.

This layer contains the tokens, registrations, lifetimes and errors of the
container. It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CircularDependencyError,
    DIException,
    LifetimeError,
    NoActiveScopeError,
    NotRegisteredError,
    ScopeError,
)
from .interfaces import IContainer, ILifetimeManager, IResolver, IScope
from .models import ContainerSettings, Registration, Token

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "NotRegisteredError",
    "ScopeError",
    "NoActiveScopeError",
    "CircularDependencyError",
    "LifetimeError",
    # Interfaces
    "IContainer",
    "IScope",
    "IResolver",
    "ILifetimeManager",
    # Models
    "Token",
    "Registration",
    "ContainerSettings",
]
