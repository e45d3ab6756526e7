"""
Mapper base class.

Mappers convert between domain entities and a persistence shape (an ORM row
or a JSON document). Implementations MUST be pure: no I/O, no session usage,
no hidden state, so that to_domain(to_persistence(e)) reproduces e.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

SourceT = TypeVar("SourceT")  # ORM model or document dict
EntityT = TypeVar("EntityT")  # Domain entity

Document = dict[str, Any]


class Mapper(ABC, Generic[SourceT, EntityT]):
    @abstractmethod
    def to_domain(self, source: SourceT) -> EntityT:
        """Convert a persisted representation into a domain entity."""

    @abstractmethod
    def to_persistence(self, entity: EntityT) -> SourceT:
        """Convert a domain entity into its persisted representation."""

    def to_domain_many(self, sources: Iterable[SourceT]) -> list[EntityT]:
        return [self.to_domain(source) for source in sources]

    def to_persistence_many(self, entities: Iterable[EntityT]) -> list[SourceT]:
        return [self.to_persistence(entity) for entity in entities]
