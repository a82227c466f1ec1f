import asyncio
import base64
import binascii
import logging

from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.model.value import StoredAsset
from cutout.domain.media.port.background_remover import BackgroundRemover
from cutout.domain.media.port.transformer import ImageTransformer
from cutout.domain.media.service.store import OwnedAssetStore
from cutout.domain.shared.error import ClientInputError
from cutout.domain.shared.service import Service

logger = logging.getLogger(__name__)


def decode_image(file_b64: str | None) -> bytes:
    if not file_b64:
        raise ClientInputError("fileB64 required (base64 encoded image bytes)", field="fileB64")
    try:
        data = base64.b64decode(file_b64, validate=False)
    except (binascii.Error, ValueError) as e:
        raise ClientInputError("fileB64 is not valid base64", field="fileB64") from e
    if not data:
        raise ClientInputError("fileB64 required (base64 encoded image bytes)", field="fileB64")
    return data


class AssetPipeline(Service):
    """Upload path: decode, remove background, mirror, store.

    Steps run strictly in order and the first failure ends the request, so a
    failed upload never leaves an object behind.
    """

    remover: BackgroundRemover
    transformer: ImageTransformer
    store: OwnedAssetStore

    async def process(self, owner: OwnerId, file_b64: str | None) -> StoredAsset:
        image = decode_image(file_b64)
        logger.debug("Decoded %d input bytes for %s", len(image), owner)

        cutout = await self.remover.remove(image)
        mirrored = await asyncio.to_thread(self.transformer.mirror, cutout)

        return await self.store.put_owned(owner, mirrored)
