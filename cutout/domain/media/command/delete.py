from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.service.store import OwnedAssetStore
from cutout.domain.shared.command import Command, CommandHandler, Result


class DeleteImage(Command):
    pathname: str | None = None
    url: str | None = None

    @property
    def target(self) -> str | None:
        return self.pathname or self.url


class ImageDeleted(Result):
    success: bool = True


class DeleteImageHandler(CommandHandler[DeleteImage, ImageDeleted]):
    owner: OwnerId
    store: OwnedAssetStore

    async def run(self, cmd: DeleteImage) -> ImageDeleted:
        await self.store.delete_owned(self.owner, cmd.target)
        return ImageDeleted()
