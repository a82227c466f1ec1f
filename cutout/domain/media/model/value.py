"""Value objects for stored images."""

from datetime import datetime
from enum import StrEnum

from cutout.domain.identity.model.value import OwnerId
from cutout.domain.shared.model.value import RootValueObject, ValueObject

KEY_ROOT = "images/"


class Action(StrEnum):
    """Unit of dispatch for the media endpoint."""

    UPLOAD = "upload"
    LIST = "list"
    DELETE = "delete"


def owner_prefix(owner: OwnerId) -> str:
    """Namespace every key of ``owner`` lives under."""
    return f"{KEY_ROOT}{owner}/"


class AssetKey(RootValueObject[str]):
    """Storage path of one processed image: ``images/<owner>/<millis>-<suffix>.png``."""

    def is_owned_by(self, owner: OwnerId) -> bool:
        return self.root.startswith(owner_prefix(owner))


class AssetRecord(ValueObject):
    """Read-only projection of a stored object, as the blob store reports it."""

    url: str
    download_url: str | None = None
    pathname: str
    size: int | None = None
    uploaded_at: datetime | None = None


class StoredAsset(ValueObject):
    """Where a freshly written object can be retrieved."""

    url: str
    pathname: str


class BlobPage(ValueObject):
    """One page of a blob listing; ``cursor`` is set when more pages follow."""

    blobs: list[AssetRecord]
    cursor: str | None = None
