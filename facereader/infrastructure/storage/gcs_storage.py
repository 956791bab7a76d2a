import logging

from google.cloud import storage

from ...config import settings
from ...application.ports.blob_store import BlobStore

logger = logging.getLogger(__name__)

GCS_PUBLIC_BASE_URL = "https://storage.googleapis.com"


class GCSBlobStore(BlobStore):
    backend = "gcs"

    def __init__(self, bucket_name: str = None, project_id: str = None, credentials_path: str = None, client=None) -> None:
        self.bucket_name = bucket_name or settings.GCS_BUCKET_NAME
        if client is None:
            credentials_path = credentials_path or settings.GOOGLE_APPLICATION_CREDENTIALS
            project_id = project_id or settings.GCS_PROJECT_ID
            client = storage.Client.from_service_account_json(credentials_path, project=project_id)
        self.client = client
        self.bucket = self.client.bucket(self.bucket_name)

    def put(self, data: bytes, key: str, content_type: str) -> str:
        blob = self.bucket.blob(key)
        logger.info(f"[GCS Upload] Uploading gs://{self.bucket_name}/{key}")
        blob.upload_from_string(data, content_type=content_type)
        return f"{GCS_PUBLIC_BASE_URL}/{self.bucket_name}/{key}"

    def get(self, key: str) -> bytes:
        return self.bucket.blob(key).download_as_bytes()
