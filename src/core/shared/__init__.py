"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Interfaces (Ports)
"""

from .exceptions import (
    DomainException,
    ValidationError,
    EntityNotFoundError,
    BusinessRuleViolationError,
    StoreError,
    StoreConnectionError,
    SchemaError,
    StorePermissionError,
    AIUnavailableError,
)
from .interfaces import UnitOfWork

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "StoreError",
    "StoreConnectionError",
    "SchemaError",
    "StorePermissionError",
    "AIUnavailableError",
    "UnitOfWork",
]
