import logging
import os
from abc import ABC, abstractmethod
from functools import lru_cache

import boto3
from botocore.config import Config as BotoConfig

from core.config import settings

logger = logging.getLogger(__name__)


class AssetStore(ABC):
    """Object storage for uploaded images, addressed by key."""

    @abstractmethod
    def upload(self, key: str, data: bytes, content_type: str, filename: str | None = None) -> str:
        """Store ``data`` under ``key`` and return its public URL."""

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class S3AssetStore(AssetStore):
    def __init__(self, bucket: str, region: str, public_url: str | None = None, client=None):
        self.bucket = bucket
        self.region = region
        self.public_url = public_url.rstrip("/") if public_url else None
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            region_name=region,
            config=BotoConfig(connect_timeout=5, read_timeout=10, retries={"max_attempts": 3}),
        )

    def url_for(self, key: str) -> str:
        if self.public_url:
            return f"{self.public_url}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload(self, key, data, content_type, filename=None):
        extra = {}
        if filename:
            extra["ContentDisposition"] = f'inline; filename="{filename}"'
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
            **extra,
        )
        return self.url_for(key)

    def delete(self, key):
        self.client.delete_object(Bucket=self.bucket, Key=key)


class LocalAssetStore(AssetStore):
    """Writes into MEDIA_DIR, which main.py serves under MEDIA_URL_PATH."""

    def __init__(self, media_dir: str, base_url: str, url_path: str):
        self.media_dir = media_dir
        self.base_url = base_url.rstrip("/")
        self.url_path = url_path.rstrip("/")

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.media_dir, key))
        root = os.path.abspath(self.media_dir)
        if os.path.commonpath([root, path]) != root:
            raise ValueError(f"Asset key escapes media dir: {key}")
        return path

    def upload(self, key, data, content_type, filename=None):
        path = self._path(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as out:
            out.write(data)
        return f"{self.base_url}{self.url_path}/{key}"

    def delete(self, key):
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)


@lru_cache
def get_asset_store() -> AssetStore:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "local":
        logger.info("Storing assets under %s", settings.MEDIA_DIR)
        return LocalAssetStore(settings.MEDIA_DIR, settings.BACKEND_URL, settings.MEDIA_URL_PATH)
    if backend != "s3":
        raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")
    logger.info("Storing assets in s3://%s", settings.S3_BUCKET)
    return S3AssetStore(settings.S3_BUCKET, settings.S3_REGION, settings.S3_PUBLIC_URL)
