"""Domain registry — in-memory index of insight domains."""

from __future__ import annotations

import logging

from rhi.core.insights.models import InsightDomain

logger = logging.getLogger(__name__)


class DomainNotFoundError(KeyError):
    """Raised when an insight is requested for an unregistered domain."""

    def __init__(self, domain_id: str) -> None:
        super().__init__(domain_id)
        self.domain_id = domain_id

    def __str__(self) -> str:
        return f"Unknown insight domain: {self.domain_id!r}"


class DomainRegistry:
    """In-memory registry of all insight domains."""

    def __init__(self) -> None:
        self._domains: dict[str, InsightDomain] = {}
        self._by_tag: dict[str, list[str]] = {}

    def register(self, domain: InsightDomain) -> None:
        """Add a domain to all indexes."""
        if domain.id in self._domains:
            raise ValueError(f"Duplicate insight domain registered: {domain.id!r}")
        self._domains[domain.id] = domain

        for tag in domain.schema.tags:
            ids = self._by_tag.setdefault(tag, [])
            if domain.id not in ids:
                ids.append(domain.id)

    def get(self, domain_id: str) -> InsightDomain:
        """Look up a domain by ID.

        Raises:
            DomainNotFoundError: no domain with that ID is registered.
        """
        try:
            return self._domains[domain_id]
        except KeyError:
            raise DomainNotFoundError(domain_id) from None

    def find_by_tag(self, tag: str) -> list[InsightDomain]:
        """Find domains with a given tag."""
        ids = self._by_tag.get(tag, [])
        return [self._domains[did] for did in ids]

    def ids(self) -> list[str]:
        return list(self._domains)

    def all(self) -> list[InsightDomain]:
        """Return all registered domains."""
        return list(self._domains.values())

    def __contains__(self, domain_id: object) -> bool:
        return domain_id in self._domains

    def __len__(self) -> int:
        return len(self._domains)
