"""
Shared enumerations for the SaaS admin backend.

Note: entity statuses and types live in src/domain/enums.py as domain concepts.
"""

from enum import Enum


class ActorType(str, Enum):
    """Who performed an administrative action"""

    USER = "user"
    SYSTEM = "system"
    SERVICE = "service"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [actor.value for actor in cls]
