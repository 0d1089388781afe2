"""
tokendi: Explicit token-based Dependency Injection container with scoped lifetimes.

Public API exports for the tokendi package.
"""

import logging

# Application exports
from tokendi.application.container import Container
from tokendi.application.scope import Scope

# Domain exports
from tokendi.domain.enums import Lifetime
from tokendi.domain.exceptions import (
    CircularDependencyError,
    DIException,
    LifetimeError,
    NoActiveScopeError,
    NotRegisteredError,
    ScopeError,
)
from tokendi.domain.models import ContainerSettings, Registration, Token

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "ContainerSettings",
    "Scope",
    # Models
    "Token",
    "Registration",
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "NotRegisteredError",
    "ScopeError",
    "NoActiveScopeError",
    "CircularDependencyError",
    "LifetimeError",
]
