"""
Mock catalog for testing

Serves generated characters from memory without making HTTP calls.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from .base import CatalogClient, Entity, FetchError


# Default size matches the live Rick and Morty catalog
DEFAULT_TOTAL_COUNT = 826

MOCK_IMAGE_BASE = "https://mock.catalog.invalid/avatar"


def generate_mock_entity(entity_id: int) -> Entity:
    """
    Build a deterministic character for an id.

    Args:
        entity_id: Character id

    Returns:
        Entity named "Character <id>" with a fake avatar URL
    """
    return Entity(
        id=entity_id,
        name=f"Character {entity_id}",
        image=f"{MOCK_IMAGE_BASE}/{entity_id}.jpeg",
    )


@dataclass
class MockCatalogClient(CatalogClient):
    """
    In-memory catalog client.

    Characters come from `entities` when given, otherwise they are
    generated on demand. Failures can be injected per endpoint.
    """

    total_count: int = DEFAULT_TOTAL_COUNT
    entities: Optional[dict[int, Entity]] = None
    delay_seconds: float = 0.0
    total_count_status: Optional[int] = None  # HTTP status to fail the count with
    failing_ids: set[int] = field(default_factory=set)

    # Call log, handy for assertions
    total_count_calls: int = 0
    requested_ids: list[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        return "mock"

    async def fetch_total_count(self) -> int:
        self.total_count_calls += 1
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if self.total_count_status is not None:
            raise FetchError(
                "Failed to fetch total character count.",
                status_code=self.total_count_status,
            )
        return self.total_count

    async def fetch_entity(self, entity_id: int) -> Entity:
        self.requested_ids.append(entity_id)
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if entity_id in self.failing_ids:
            raise FetchError(f"Failed to fetch character with ID: {entity_id}", status_code=404)

        if self.entities is not None:
            if entity_id not in self.entities:
                raise FetchError(f"Failed to fetch character with ID: {entity_id}", status_code=404)
            return self.entities[entity_id]

        if not 1 <= entity_id <= self.total_count:
            raise FetchError(f"Failed to fetch character with ID: {entity_id}", status_code=404)
        return generate_mock_entity(entity_id)


def create_named_catalog(names: list[str]) -> MockCatalogClient:
    """Create a mock catalog whose characters carry the given names, ids from 1."""
    entities = {
        i: Entity(id=i, name=name, image=f"{MOCK_IMAGE_BASE}/{i}.jpeg")
        for i, name in enumerate(names, start=1)
    }
    return MockCatalogClient(total_count=len(entities), entities=entities)
