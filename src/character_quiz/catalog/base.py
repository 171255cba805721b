"""
Base protocol for character catalog clients

Defines the records and the interface every catalog source must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog errors."""
    pass


class FetchError(CatalogError):
    """Request failed: non-success HTTP status or no response at all."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class InvalidPayloadError(CatalogError):
    """Response body is missing required fields."""
    pass


@dataclass(frozen=True)
class Entity:
    """A character record from the catalog."""
    id: int
    name: str
    image: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "image": self.image}

    @classmethod
    def from_dict(cls, data: dict) -> "Entity":
        """Parse a catalog record, ignoring fields we don't use."""
        try:
            return cls(
                id=int(data["id"]),
                name=str(data["name"]),
                image=str(data["image"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidPayloadError(f"Malformed character record: {e!r}")


class CatalogClient(ABC):
    """
    Abstract base class for character catalog clients.

    Clients answer two questions: how many characters exist, and
    what a given character looks like.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Client name (e.g., 'http', 'mock')."""
        pass

    @abstractmethod
    async def fetch_total_count(self) -> int:
        """
        Get the number of characters in the catalog.

        Returns:
            Total character count

        Raises:
            FetchError: On non-success status or transport failure
            InvalidPayloadError: When the count field is missing
        """
        pass

    @abstractmethod
    async def fetch_entity(self, entity_id: int) -> Entity:
        """
        Get a single character by numeric id.

        Args:
            entity_id: Character id, 1-based

        Returns:
            Parsed Entity

        Raises:
            FetchError: On non-success status or transport failure
            InvalidPayloadError: When the record is malformed
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        pass

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
