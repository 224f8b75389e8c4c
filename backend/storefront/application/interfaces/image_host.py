from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class HostedImage:
    """An image stored on the external asset host."""

    url: str
    public_id: str


class ImageHost(ABC):
    """Port for the third-party image host (upload and release of assets)."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    async def upload(self, content: bytes, filename: str, content_type: str) -> HostedImage:
        """Store *content* and return its public URL and asset id."""
        ...

    @abstractmethod
    async def destroy(self, public_id: str) -> None:
        """Release a previously uploaded asset."""
        ...
