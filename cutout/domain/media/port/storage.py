from abc import abstractmethod
from typing import Protocol

from cutout.domain.media.model.value import AssetKey, BlobPage, StoredAsset
from cutout.domain.shared.port import Port


class BlobStorePort(Port, Protocol):
    """Object store holding processed images. Implementations raise StorageError."""

    @abstractmethod
    async def put(self, key: AssetKey, content: bytes, content_type: str) -> StoredAsset:
        """Write ``content`` as a publicly retrievable object under ``key``."""
        ...

    @abstractmethod
    async def list(self, prefix: str, cursor: str | None = None) -> BlobPage:
        """Return one page of objects whose key starts with ``prefix``."""
        ...

    @abstractmethod
    async def delete(self, key: AssetKey) -> None:
        """Remove the object under ``key``. Deleting a missing key is not an error."""
        ...
