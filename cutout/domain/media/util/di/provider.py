from dishka import provide

from cutout.domain.media.command.delete import DeleteImageHandler
from cutout.domain.media.command.upload import UploadImageHandler
from cutout.domain.media.port.background_remover import BackgroundRemover
from cutout.domain.media.port.storage import BlobStorePort
from cutout.domain.media.port.transformer import ImageTransformer
from cutout.domain.media.query.list_images import ListImagesHandler
from cutout.domain.media.service.pipeline import AssetPipeline
from cutout.domain.media.service.store import OwnedAssetStore
from cutout.infrastructure.imaging.transformer import PillowMirrorTransformer
from cutout.util.di.base import Provider
from cutout.util.di.scope import Scope


class MediaProvider(Provider):
    @provide(scope=Scope.APP)
    def get_transformer(self) -> ImageTransformer:
        return PillowMirrorTransformer()

    @provide(scope=Scope.REQUEST)
    def get_owned_asset_store(self, blob_store: BlobStorePort) -> OwnedAssetStore:
        return OwnedAssetStore(blob_store=blob_store)

    @provide(scope=Scope.REQUEST)
    def get_asset_pipeline(
        self,
        remover: BackgroundRemover,
        transformer: ImageTransformer,
        store: OwnedAssetStore,
    ) -> AssetPipeline:
        return AssetPipeline(remover=remover, transformer=transformer, store=store)

    # Command Handlers
    upload_handler = provide(UploadImageHandler, scope=Scope.REQUEST)
    delete_handler = provide(DeleteImageHandler, scope=Scope.REQUEST)

    # Query Handlers
    list_handler = provide(ListImagesHandler, scope=Scope.REQUEST)
