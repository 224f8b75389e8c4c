"""Port for the catalog change log followed by change capture."""

from abc import ABC, abstractmethod

from storefront.domain.entities import Product, StoreChange


class ChangeLog(ABC):
    """Ordered, resumable log of committed catalog mutations.

    Positions are strictly increasing. A record only becomes readable once
    the transaction that wrote it has committed.
    """

    @abstractmethod
    async def open(self) -> int:
        """Check the log is reachable and return its current head position.

        Raises ChangeLogUnavailableError when the log cannot be read.
        """
        ...

    @abstractmethod
    async def read_since(self, position: int, limit: int = 100) -> list[StoreChange]:
        """Return up to *limit* records after *position*, oldest first."""
        ...

    @abstractmethod
    async def snapshot(self) -> list[Product]:
        """Return the full current product collection, newest first."""
        ...
