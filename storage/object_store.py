# backend/storage/object_store.py
# S3-compatible object store for uploaded audio (AWS S3, Cloudflare R2, MinIO,
# DigitalOcean Spaces) selected through STORAGE_ENDPOINT_URL.
import time
import logging
from typing import Optional
from urllib.parse import quote

import boto3

from config import settings

logger = logging.getLogger("storage.object_store")


def build_audio_key(title: str, now_ms: Optional[int] = None) -> str:
    """Key derived from the title and the upload time in milliseconds."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{settings.AUDIO_KEY_PREFIX}/{title}-{now_ms}.mp3"


class S3ObjectStore:
    """Thin wrapper over a boto3 S3 client bound to one bucket."""

    def __init__(self, bucket_name: str, s3_client=None):
        self.bucket_name = bucket_name
        self.s3_client = s3_client or boto3.client(
            "s3",
            endpoint_url=settings.STORAGE_ENDPOINT_URL,
            aws_access_key_id=settings.STORAGE_ACCESS_KEY_ID,
            aws_secret_access_key=settings.STORAGE_SECRET_ACCESS_KEY,
            region_name=settings.STORAGE_REGION,
        )

    def upload_bytes(self, remote_key: str, data: bytes, content_type: str = "audio/mpeg") -> None:
        """
        Stores `data` under `remote_key`.

        botocore errors propagate to the caller.
        """
        self.s3_client.put_object(
            Bucket=self.bucket_name,
            Key=remote_key,
            Body=data,
            ContentType=content_type,
        )
        logger.info(f"⬆️ Uploaded {len(data)} bytes to {self.bucket_name}/{remote_key}")

    def get_public_url(self, remote_key: str) -> str:
        quoted_key = quote(remote_key)
        if settings.STORAGE_PUBLIC_BASE_URL:
            return f"{settings.STORAGE_PUBLIC_BASE_URL.rstrip('/')}/{quoted_key}"
        if settings.STORAGE_ENDPOINT_URL:
            return f"{settings.STORAGE_ENDPOINT_URL.rstrip('/')}/{self.bucket_name}/{quoted_key}"
        return f"https://{self.bucket_name}.s3.{settings.STORAGE_REGION}.amazonaws.com/{quoted_key}"


_store: Optional[S3ObjectStore] = None


def get_object_store() -> S3ObjectStore:
    """Lazily builds the shared store so importing the app needs no credentials."""
    global _store
    if _store is None:
        _store = S3ObjectStore(settings.STORAGE_BUCKET)
    return _store
