import os
import logging

from ...config import settings
from ...application.ports.blob_store import BlobStore

logger = logging.getLogger(__name__)


class LocalBlobStore(BlobStore):
    backend = "local"

    def __init__(self, directory: str = None, public_prefix: str = None) -> None:
        self.directory = directory or settings.UPLOAD_DIR
        self.public_prefix = (public_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")
        if not os.path.isdir(self.directory):
            logger.info(f"Upload directory {self.directory} does not exist. Creating it...")
        os.makedirs(self.directory, exist_ok=True)

    def _path_for(self, key: str) -> str:
        if not key or os.path.basename(key) != key or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return os.path.join(self.directory, key)

    def put(self, data: bytes, key: str, content_type: str) -> str:
        path = self._path_for(key)
        logger.info(f"[Disk Upload] Attempting to save to: {path}")
        with open(path, "wb") as f:
            f.write(data)
        logger.info(f"[Disk Upload] Successfully saved: {path}")
        return f"{self.public_prefix}/{key}"

    def get(self, key: str) -> bytes:
        with open(self._path_for(key), "rb") as f:
            return f.read()
