import logging
from typing import Optional

import boto3

from ...config import settings
from ...application.ports.blob_store import BlobStore

logger = logging.getLogger(__name__)


class S3BlobStore(BlobStore):
    """S3 or S3-compatible object storage; public-read objects or presigned URLs."""

    backend = "s3"

    def __init__(
        self,
        bucket: str = None,
        region: str = None,
        access_key: str = None,
        secret_key: str = None,
        endpoint_url: Optional[str] = None,
        public_read: Optional[bool] = None,
        url_expiry: Optional[int] = None,
        client=None,
    ) -> None:
        self.bucket = bucket or settings.S3_BUCKET_NAME
        self.region = region or settings.S3_REGION
        self.endpoint_url = endpoint_url if endpoint_url is not None else settings.S3_ENDPOINT_URL
        self.public_read = settings.S3_PUBLIC_READ if public_read is None else public_read
        self.url_expiry = url_expiry or settings.S3_URL_EXPIRY
        if client is None:
            client = boto3.client(
                "s3",
                region_name=self.region,
                aws_access_key_id=access_key or settings.S3_ACCESS_KEY_ID,
                aws_secret_access_key=secret_key or settings.S3_SECRET_ACCESS_KEY,
                endpoint_url=self.endpoint_url or None,
            )
        self.client = client

    def _public_url(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def put(self, data: bytes, key: str, content_type: str) -> str:
        params = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": data,
            "ContentType": content_type,
        }
        if self.public_read:
            params["ACL"] = "public-read"
        logger.info(f"[S3 Upload] Uploading s3://{self.bucket}/{key} (public={self.public_read})")
        self.client.put_object(**params)

        if self.public_read:
            return self._public_url(key)
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket, "Key": key},
            ExpiresIn=self.url_expiry,
        )

    def get(self, key: str) -> bytes:
        response = self.client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"].read()
