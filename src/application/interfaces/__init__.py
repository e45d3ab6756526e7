"""
Application layer interfaces (ports).

These protocols define the contracts between the application layer
and the infrastructure layer, following the Dependency Inversion Principle.
"""

from src.application.interfaces.services import IEventPublisher, IReadModelStore

__all__ = [
    "IEventPublisher",
    "IReadModelStore",
]
