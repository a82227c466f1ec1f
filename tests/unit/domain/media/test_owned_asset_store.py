"""Unit tests for OwnedAssetStore: namespace scoping of put, list and delete."""

import pytest

from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.model.key import make_key
from cutout.domain.media.model.value import AssetKey, AssetRecord, BlobPage
from cutout.domain.media.service.store import OwnedAssetStore
from cutout.domain.shared.error import ClientInputError, OwnershipError

from fakes import InMemoryBlobStore

ALICE = OwnerId("alice")
BOB = OwnerId("bob")


def _make_store(page_size: int = 1000) -> tuple[OwnedAssetStore, InMemoryBlobStore]:
    blobs = InMemoryBlobStore(page_size=page_size)
    return OwnedAssetStore(blob_store=blobs), blobs


class TestPutOwned:
    @pytest.mark.asyncio
    async def test_writes_under_owner_prefix(self):
        store, blobs = _make_store()

        stored = await store.put_owned(ALICE, b"png-bytes")

        assert stored.pathname.startswith("images/alice/")
        assert stored.pathname.endswith(".png")
        assert blobs.objects[stored.pathname] == b"png-bytes"

    @pytest.mark.asyncio
    async def test_uses_key_factory(self):
        blobs = InMemoryBlobStore()
        store = OwnedAssetStore(
            blob_store=blobs,
            key_factory=lambda owner: AssetKey(f"images/{owner}/fixed.png"),
        )

        stored = await store.put_owned(ALICE, b"x")

        assert stored.pathname == "images/alice/fixed.png"


class TestListOwned:
    @pytest.mark.asyncio
    async def test_lists_only_callers_objects(self):
        store, blobs = _make_store()
        await store.put_owned(ALICE, b"a1")
        await store.put_owned(ALICE, b"a2")
        await store.put_owned(BOB, b"b1")

        alice_items = await store.list_owned(ALICE)
        bob_items = await store.list_owned(BOB)

        assert len(alice_items) == 2
        assert all(item.pathname.startswith("images/alice/") for item in alice_items)
        assert [item.pathname for item in bob_items] == [
            k for k in blobs.objects if k.startswith("images/bob/")
        ]

    @pytest.mark.asyncio
    async def test_empty_namespace(self):
        store, _ = _make_store()
        assert await store.list_owned(ALICE) == []

    @pytest.mark.asyncio
    async def test_follows_pagination(self):
        store, blobs = _make_store(page_size=2)
        for i in range(5):
            blobs.objects[f"images/alice/{i}-aaaaaaaaaa.png"] = b"x"

        items = await store.list_owned(ALICE)

        assert len(items) == 5
        assert blobs.list_calls == [
            ("images/alice/", None),
            ("images/alice/", "2"),
            ("images/alice/", "4"),
        ]

    @pytest.mark.asyncio
    async def test_drops_records_outside_prefix(self):
        class LeakyStore(InMemoryBlobStore):
            async def list(self, prefix, cursor=None):
                return BlobPage(
                    blobs=[
                        AssetRecord(url="u1", pathname="images/alice/1-a.png"),
                        AssetRecord(url="u2", pathname="images/alice-2/1-b.png"),
                    ]
                )

        store = OwnedAssetStore(blob_store=LeakyStore())

        items = await store.list_owned(ALICE)

        assert [item.pathname for item in items] == ["images/alice/1-a.png"]


class TestDeleteOwned:
    @pytest.mark.asyncio
    async def test_deletes_own_key(self):
        store, blobs = _make_store()
        stored = await store.put_owned(ALICE, b"x")

        key = await store.delete_owned(ALICE, stored.pathname)

        assert str(key) == stored.pathname
        assert stored.pathname not in blobs.objects

    @pytest.mark.asyncio
    async def test_deletes_own_url(self):
        store, blobs = _make_store()
        stored = await store.put_owned(ALICE, b"x")

        await store.delete_owned(ALICE, stored.url)

        assert blobs.deleted == [stored.pathname]

    @pytest.mark.asyncio
    async def test_foreign_key_is_refused_without_store_call(self):
        store, blobs = _make_store()
        stored = await store.put_owned(ALICE, b"x")

        with pytest.raises(OwnershipError) as exc_info:
            await store.delete_owned(BOB, stored.pathname)

        assert exc_info.value.message == "Not your file"
        assert blobs.deleted == []
        assert stored.pathname in blobs.objects

    @pytest.mark.asyncio
    async def test_traversal_is_refused(self):
        store, blobs = _make_store()

        with pytest.raises(OwnershipError):
            await store.delete_owned(ALICE, "images/alice/../bob/1-a.png")

        assert blobs.deleted == []

    @pytest.mark.asyncio
    async def test_unrecognisable_target_is_refused(self):
        store, blobs = _make_store()

        with pytest.raises(OwnershipError):
            await store.delete_owned(ALICE, "https://example.com/cat.png")

        assert blobs.deleted == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("target", [None, "", "   "])
    async def test_missing_target(self, target):
        store, blobs = _make_store()

        with pytest.raises(ClientInputError) as exc_info:
            await store.delete_owned(ALICE, target)

        assert exc_info.value.message == "pathname or url required"
        assert blobs.deleted == []

    @pytest.mark.asyncio
    async def test_deleting_twice_is_not_an_error(self):
        store, _ = _make_store()
        key = make_key(ALICE)

        await store.delete_owned(ALICE, str(key))
        await store.delete_owned(ALICE, str(key))
