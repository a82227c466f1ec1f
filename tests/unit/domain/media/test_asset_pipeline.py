"""Unit tests for the upload pipeline: decode, remove, mirror, store."""

import base64
from unittest.mock import AsyncMock, MagicMock

import pytest

from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.service.pipeline import AssetPipeline, decode_image
from cutout.domain.media.service.store import OwnedAssetStore
from cutout.domain.shared.error import ClientInputError, TransformError, UpstreamServiceError

from fakes import InMemoryBlobStore

OWNER = OwnerId("owner-1")
IMAGE = b"\x89PNG original"
IMAGE_B64 = base64.b64encode(IMAGE).decode()


def _make_pipeline(
    remover: AsyncMock | None = None,
    transformer: MagicMock | None = None,
) -> tuple[AssetPipeline, InMemoryBlobStore, AsyncMock, MagicMock]:
    blobs = InMemoryBlobStore()
    if remover is None:
        remover = AsyncMock()
        remover.remove.return_value = b"cutout"
    if transformer is None:
        transformer = MagicMock()
        transformer.mirror.return_value = b"mirrored"
    pipeline = AssetPipeline(
        remover=remover,
        transformer=transformer,
        store=OwnedAssetStore(blob_store=blobs),
    )
    return pipeline, blobs, remover, transformer


class TestDecodeImage:
    def test_decodes_base64(self):
        assert decode_image(IMAGE_B64) == IMAGE

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_payload(self, value):
        with pytest.raises(ClientInputError) as exc_info:
            decode_image(value)

        assert exc_info.value.message == "fileB64 required (base64 encoded image bytes)"
        assert exc_info.value.field == "fileB64"

    def test_invalid_base64(self):
        with pytest.raises(ClientInputError) as exc_info:
            decode_image("abc")

        assert exc_info.value.message == "fileB64 is not valid base64"


class TestAssetPipeline:
    @pytest.mark.asyncio
    async def test_runs_steps_in_order_and_stores_result(self):
        pipeline, blobs, remover, transformer = _make_pipeline()

        stored = await pipeline.process(OWNER, IMAGE_B64)

        remover.remove.assert_awaited_once_with(IMAGE)
        transformer.mirror.assert_called_once_with(b"cutout")
        assert blobs.objects == {stored.pathname: b"mirrored"}
        assert stored.pathname.startswith("images/owner-1/")

    @pytest.mark.asyncio
    async def test_missing_payload_calls_nothing(self):
        pipeline, blobs, remover, transformer = _make_pipeline()

        with pytest.raises(ClientInputError):
            await pipeline.process(OWNER, None)

        remover.remove.assert_not_awaited()
        transformer.mirror.assert_not_called()
        assert blobs.objects == {}

    @pytest.mark.asyncio
    async def test_removal_failure_stores_nothing(self):
        remover = AsyncMock()
        remover.remove.side_effect = UpstreamServiceError(
            "remove.bg failed", details='{"errors":[{"title":"Insufficient credits"}]}'
        )
        pipeline, blobs, _, transformer = _make_pipeline(remover=remover)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await pipeline.process(OWNER, IMAGE_B64)

        assert "Insufficient credits" in exc_info.value.details
        transformer.mirror.assert_not_called()
        assert blobs.objects == {}

    @pytest.mark.asyncio
    async def test_transform_failure_stores_nothing(self):
        transformer = MagicMock()
        transformer.mirror.side_effect = TransformError("Image processing failed")
        pipeline, blobs, _, _ = _make_pipeline(transformer=transformer)

        with pytest.raises(TransformError):
            await pipeline.process(OWNER, IMAGE_B64)

        assert blobs.objects == {}
