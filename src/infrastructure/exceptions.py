"""
Infrastructure exceptions for the SaaS admin backend.

Raised by persistence adapters; they are not business rule violations and
surface as 500/503 responses.
"""

from src.domain.exceptions import AdminException


class PersistenceException(AdminException):
    """A repository operation failed."""

    def __init__(self, operation: str, entity: str, reason: str):
        super().__init__(
            f"Failed to {operation} {entity}",
            "PERSISTENCE_ERROR",
            {"operation": operation, "entity": entity, "reason": reason},
        )


class DocumentStoreUnavailableException(AdminException):
    """The document backend is selected but Redis is not reachable."""

    def __init__(self, reason: str = "Redis connection is not available"):
        super().__init__(
            "Document store unavailable",
            "DOCUMENT_STORE_UNAVAILABLE",
            {"reason": reason},
        )
