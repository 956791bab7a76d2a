from ...config import Settings
from ...application.ports.blob_store import BlobStore


def build_blob_store(s: Settings) -> BlobStore:
    backend = s.storage_backend
    if backend == "local":
        from .local_storage import LocalBlobStore
        return LocalBlobStore(directory=s.UPLOAD_DIR, public_prefix=s.UPLOAD_URL_PREFIX)
    if backend == "gcs":
        from .gcs_storage import GCSBlobStore
        return GCSBlobStore(
            bucket_name=s.GCS_BUCKET_NAME,
            project_id=s.GCS_PROJECT_ID,
            credentials_path=s.GOOGLE_APPLICATION_CREDENTIALS,
        )
    if backend == "s3":
        from .s3_storage import S3BlobStore
        return S3BlobStore(
            bucket=s.S3_BUCKET_NAME,
            region=s.S3_REGION,
            access_key=s.S3_ACCESS_KEY_ID,
            secret_key=s.S3_SECRET_ACCESS_KEY,
            endpoint_url=s.S3_ENDPOINT_URL,
            public_read=s.S3_PUBLIC_READ,
            url_expiry=s.S3_URL_EXPIRY,
        )
    raise ValueError(f"Unknown storage backend: {s.STORAGE_BACKEND}")
