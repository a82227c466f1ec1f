from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.model.value import AssetRecord
from cutout.domain.media.service.store import OwnedAssetStore
from cutout.domain.shared.command import Result
from cutout.domain.shared.query import Query, QueryHandler


class ListImages(Query):
    pass


class ImageList(Result):
    items: list[AssetRecord]


class ListImagesHandler(QueryHandler[ListImages, ImageList]):
    owner: OwnerId
    store: OwnedAssetStore

    async def run(self, query: ListImages) -> ImageList:
        return ImageList(items=await self.store.list_owned(self.owner))
