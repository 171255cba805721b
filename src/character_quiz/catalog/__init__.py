"""
Character catalog clients for character-quiz

Clients share a common interface so the quiz never knows where
characters come from. Clients: HTTP (httpx), Mock (in-memory)
"""

from .base import CatalogClient, CatalogError, Entity, FetchError, InvalidPayloadError
from .http import HttpCatalogClient
from .mock import MockCatalogClient, create_named_catalog, generate_mock_entity

__all__ = [
    # Base classes and types
    "CatalogClient",
    "CatalogError",
    "Entity",
    "FetchError",
    "InvalidPayloadError",
    # Clients
    "HttpCatalogClient",
    "MockCatalogClient",
    # Helpers
    "create_named_catalog",
    "generate_mock_entity",
]


def get_client(name: str, **kwargs) -> CatalogClient:
    """
    Factory function to get a catalog client by name.

    Args:
        name: Client name ('http', 'mock')
        **kwargs: Client-specific options

    Returns:
        Configured CatalogClient instance

    Raises:
        ValueError: If client name is unknown
    """
    clients = {
        "http": HttpCatalogClient,
        "mock": MockCatalogClient,
    }

    if name not in clients:
        raise ValueError(f"Unknown catalog client: {name}. Valid options: {list(clients.keys())}")

    return clients[name](**kwargs)
