from pydantic import ConfigDict, Field

from cutout.domain.identity.model.value import OwnerId
from cutout.domain.media.service.pipeline import AssetPipeline
from cutout.domain.shared.command import Command, CommandHandler, Result


class UploadImage(Command):
    model_config = ConfigDict(populate_by_name=True)

    file_b64: str | None = Field(default=None, alias="fileB64")


class ImageUploaded(Result):
    url: str
    pathname: str


class UploadImageHandler(CommandHandler[UploadImage, ImageUploaded]):
    owner: OwnerId
    pipeline: AssetPipeline

    async def run(self, cmd: UploadImage) -> ImageUploaded:
        stored = await self.pipeline.process(self.owner, cmd.file_b64)
        return ImageUploaded(url=stored.url, pathname=stored.pathname)
