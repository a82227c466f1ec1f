import logging
from collections.abc import Callable

from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.model.key import extract_key, make_key
from cutout.domain.media.model.value import AssetKey, AssetRecord, StoredAsset, owner_prefix
from cutout.domain.media.port.storage import BlobStorePort
from cutout.domain.shared.error import ClientInputError, OwnershipError
from cutout.domain.shared.service import Service

logger = logging.getLogger(__name__)

PNG_CONTENT_TYPE = "image/png"


class OwnedAssetStore(Service):
    """Blob store access confined to one owner's namespace."""

    blob_store: BlobStorePort
    key_factory: Callable[[OwnerId], AssetKey] = make_key

    async def put_owned(self, owner: OwnerId, content: bytes) -> StoredAsset:
        key = self.key_factory(owner)
        stored = await self.blob_store.put(key, content, PNG_CONTENT_TYPE)
        logger.info("Stored %s (%d bytes)", stored.pathname, len(content))
        return stored

    async def list_owned(self, owner: OwnerId) -> list[AssetRecord]:
        prefix = owner_prefix(owner)
        records: list[AssetRecord] = []
        cursor: str | None = None
        while True:
            page = await self.blob_store.list(prefix, cursor=cursor)
            records.extend(r for r in page.blobs if r.pathname.startswith(prefix))
            if not page.cursor:
                return records
            cursor = page.cursor

    async def delete_owned(self, owner: OwnerId, target: str | None) -> AssetKey:
        """Delete the object ``target`` names, if ``owner`` owns it.

        ``target`` may be a key or a full retrieval URL; the key is always
        re-derived from it before the ownership check.
        """
        if not target or not target.strip():
            raise ClientInputError("pathname or url required", field="pathname")

        key = extract_key(target)
        if key is None or not key.is_owned_by(owner):
            logger.warning("Refused delete of %r for owner %s", target, owner)
            raise OwnershipError()

        await self.blob_store.delete(key)
        logger.info("Deleted %s", key)
        return key
