# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio
import logging
import os
import shutil
from typing import Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError
from google.api_core.exceptions import GoogleAPIError
from google.cloud import storage

from mytube.common.errors import StorageError
from mytube.config.config_service import (
    ConfigService,
    StorageBackendEnum,
    config_service,
)

logger = logging.getLogger(__name__)

_CONTENT_TYPES = {
    ".m3u8": "application/vnd.apple.mpegurl",
    ".ts": "video/mp2t",
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".vtt": "text/vtt",
}


def content_type_for_key(key: str) -> str:
    ext = os.path.splitext(key)[1].lower()
    return _CONTENT_TYPES.get(ext, "application/octet-stream")


class StorageService:
    """
    Object storage used by the publish pipeline. Implementations are blocking;
    the async wrappers push them onto a worker thread.
    """

    def download_file(self, bucket: str, key: str, dest: str) -> str:
        raise NotImplementedError

    def upload_file(self, bucket: str, key: str, path: str, content_type: Optional[str] = None) -> None:
        raise NotImplementedError

    async def download(self, bucket: str, key: str, dest: str) -> str:
        return await asyncio.to_thread(self.download_file, bucket, key, dest)

    async def upload(self, bucket: str, key: str, path: str, content_type: Optional[str] = None) -> None:
        await asyncio.to_thread(self.upload_file, bucket, key, path, content_type)


class S3StorageService(StorageService):
    def __init__(self, region: Optional[str] = None, client=None):
        self.client = client or boto3.client("s3", region_name=region)

    def download_file(self, bucket: str, key: str, dest: str) -> str:
        try:
            self.client.download_file(bucket, key, dest)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to download s3://{bucket}/{key}: {e}")
            raise StorageError(f"S3 download failed for {key}: {e}") from e
        return dest

    def upload_file(self, bucket: str, key: str, path: str, content_type: Optional[str] = None) -> None:
        try:
            self.client.upload_file(
                path,
                bucket,
                key,
                ExtraArgs={"ContentType": content_type or content_type_for_key(key)},
            )
        except (BotoCoreError, ClientError, S3UploadFailedError) as e:
            logger.error(f"Failed to upload {path} to s3://{bucket}/{key}: {e}")
            raise StorageError(f"S3 upload failed for {key}: {e}") from e
        logger.info(f"Uploaded s3://{bucket}/{key}")


class GcsService(StorageService):
    def __init__(self, client: Optional[storage.Client] = None):
        self.storage_client = client or storage.Client()

    def download_file(self, bucket: str, key: str, dest: str) -> str:
        try:
            blob = self.storage_client.bucket(bucket).blob(key)
            blob.download_to_filename(dest)
        except GoogleAPIError as e:
            logger.error(f"Failed to download GCS blob gs://{bucket}/{key}: {e}")
            raise StorageError(f"GCS download failed for {key}: {e}") from e
        return dest

    def upload_file(self, bucket: str, key: str, path: str, content_type: Optional[str] = None) -> None:
        try:
            blob = self.storage_client.bucket(bucket).blob(key)
            blob.upload_from_filename(path, content_type=content_type or content_type_for_key(key))
        except GoogleAPIError as e:
            logger.error(f"Failed to upload {path} to gs://{bucket}/{key}: {e}")
            raise StorageError(f"GCS upload failed for {key}: {e}") from e
        logger.info(f"Uploaded gs://{bucket}/{key}")


class LocalStorageService(StorageService):
    """Stores objects as plain files under ``<root>/<bucket>/<key>``."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def _object_path(self, bucket: str, key: str) -> str:
        path = os.path.abspath(os.path.join(self.root, bucket, key))
        if not path.startswith(os.path.join(self.root, bucket) + os.sep):
            raise StorageError(f"Refusing key outside bucket: {key}")
        return path

    def download_file(self, bucket: str, key: str, dest: str) -> str:
        source = self._object_path(bucket, key)
        try:
            shutil.copyfile(source, dest)
        except OSError as e:
            raise StorageError(f"Local download failed for {key}: {e}") from e
        return dest

    def upload_file(self, bucket: str, key: str, path: str, content_type: Optional[str] = None) -> None:
        target = self._object_path(bucket, key)
        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            shutil.copyfile(path, target)
        except OSError as e:
            raise StorageError(f"Local upload failed for {key}: {e}") from e
        logger.info(f"Stored {key} under {self.root}/{bucket}")


def build_storage_service(cfg: ConfigService) -> StorageService:
    if cfg.STORAGE_BACKEND == StorageBackendEnum.AWS:
        return S3StorageService(region=cfg.AWS_REGION)
    if cfg.STORAGE_BACKEND == StorageBackendEnum.GCS:
        return GcsService()
    return LocalStorageService(cfg.DATA_ROOT)


def get_storage_service() -> StorageService:
    """FastAPI dependency for the configured backend."""
    return build_storage_service(config_service)


def playback_base_url(cfg: ConfigService) -> Optional[str]:
    """Base URL that uploaded keys are served under, if one is reachable."""
    if cfg.CDN_UPLOADS_BASE_URL:
        return cfg.CDN_UPLOADS_BASE_URL
    if cfg.STORAGE_BACKEND == StorageBackendEnum.AWS and cfg.UPLOADS_BUCKET and cfg.AWS_REGION:
        return f"https://{cfg.UPLOADS_BUCKET}.s3.{cfg.AWS_REGION}.amazonaws.com"
    if cfg.STORAGE_BACKEND == StorageBackendEnum.GCS and cfg.UPLOADS_BUCKET:
        return f"https://storage.googleapis.com/{cfg.UPLOADS_BUCKET}"
    return None
