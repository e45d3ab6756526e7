"""Read-side queries."""

from src.application.queries.read_models import (GetUsersByTenantQuery,
                                                 ReadModelQueries, UserPage)

__all__ = ["GetUsersByTenantQuery", "ReadModelQueries", "UserPage"]
