import logging
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from cutout.domain.media.model.value import AssetKey, AssetRecord, BlobPage, StoredAsset
from cutout.domain.media.port.storage import BlobStorePort
from cutout.domain.shared.error import StorageError

logger = logging.getLogger(__name__)

TMP_PREFIX = ".partial-"


class LocalBlobStore(BlobStorePort):
    """Local filesystem implementation of BlobStorePort.

    Keys map to paths below ``base_path``; ``public_url`` is where the app
    serves that directory, so returned URLs resolve.
    """

    def __init__(self, base_path: str, public_url: str) -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.public_url = public_url.rstrip("/")

    def _safe_path(self, key: str) -> Path:
        """Resolve key within base_path, rejecting path traversal attempts."""
        target = self.base_path / key
        if not target.resolve().is_relative_to(self.base_path.resolve()):
            raise StorageError("Invalid key", details=key)
        return target

    def _record(self, path: Path) -> AssetRecord:
        key = path.relative_to(self.base_path).as_posix()
        stat = path.stat()
        url = f"{self.public_url}/{key}"
        return AssetRecord(
            url=url,
            download_url=f"{url}?download=1",
            pathname=key,
            size=stat.st_size,
            uploaded_at=datetime.fromtimestamp(stat.st_mtime, UTC),
        )

    async def put(self, key: AssetKey, content: bytes, content_type: str) -> StoredAsset:
        target = self._safe_path(str(key))
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # Atomic write: write to temp file then rename
            fd, tmp_path = tempfile.mkstemp(dir=target.parent, prefix=TMP_PREFIX)
            try:
                with open(fd, "wb") as f:
                    f.write(content)
                Path(tmp_path).replace(target)
            except Exception:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError("Blob upload failed", details=str(e)) from e

        logger.debug("Wrote %s", target)
        return StoredAsset(url=f"{self.public_url}/{key}", pathname=str(key))

    async def delete(self, key: AssetKey) -> None:
        target = self._safe_path(str(key))
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError("Blob delete failed", details=str(e)) from e

    async def list(self, prefix: str, cursor: str | None = None) -> BlobPage:
        directory, _, name_prefix = prefix.rpartition("/")
        root = self._safe_path(directory) if directory else self.base_path
        if not root.is_dir():
            return BlobPage(blobs=[])
        try:
            paths = sorted(
                p
                for p in root.rglob("*")
                if p.is_file()
                and p.relative_to(root).as_posix().startswith(name_prefix)
                and not p.name.startswith(TMP_PREFIX)
            )
            return BlobPage(blobs=[self._record(p) for p in paths])
        except OSError as e:
            raise StorageError("Blob list failed", details=str(e)) from e
