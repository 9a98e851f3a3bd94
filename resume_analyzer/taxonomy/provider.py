
from __future__ import annotations

from typing import Protocol


class IndustryKnowledgeBase(Protocol):
    def industries(self) -> frozenset[str]:
        """Return every industry tag the knowledge base knows about."""

    def keywords_for(self, industry: str) -> tuple[str, ...]:
        """Return canonical keywords in table order, or () for unknown tags."""

    def projects_for(self, industry: str) -> tuple[str, ...]:
        """Return example project ideas in table order, or () for unknown tags."""
