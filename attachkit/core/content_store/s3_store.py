"""
S3 content store.

Objects are keyed <prefix>/YYYY/MM/DD/<hash16>-<id>; the original filename
travels in object metadata.
"""

from __future__ import annotations

from urllib.parse import quote, unquote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from attachkit.config import S3Config
from attachkit.core.content_store.base import ContentStore
from attachkit.models.content import ContentKey, EphemeralContent
from attachkit.utils.exceptions import DataNotFound, StorageError
from attachkit.utils.id_generator import generate_object_key
from attachkit.utils.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND_CODES = {"NoSuchKey", "NotFound", "404"}


def _is_not_found(error: ClientError) -> bool:
    return str(error.response.get("Error", {}).get("Code")) in NOT_FOUND_CODES


class S3ContentStore(ContentStore):
    """Object-storage backend (AWS S3 or any S3-compatible endpoint)."""

    def __init__(self, cfg: S3Config, client=None) -> None:
        self.cfg = cfg
        if client is None:
            s3_cfg = Config(s3={"addressing_style": "path"} if cfg.force_path_style else {})
            client = boto3.client(
                "s3",
                endpoint_url=cfg.endpoint,
                aws_access_key_id=cfg.access_key,
                aws_secret_access_key=cfg.secret_key,
                region_name=cfg.region,
                use_ssl=cfg.use_ssl,
                config=s3_cfg,
            )
        self.client = client

    def store(self, content: EphemeralContent) -> ContentKey:
        key = ContentKey(generate_object_key(self.cfg.prefix, content.content_hash))
        metadata = {"name": quote(content.name)} if content.name else {}
        try:
            self.client.put_object(Bucket=self.cfg.bucket, Key=key, Body=content.data, Metadata=metadata)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to store content: {e}", {"key": key}) from e

        logger.debug(f"Stored {content.size} bytes at s3://{self.cfg.bucket}/{key}")
        return key

    def fetch(self, key: str) -> EphemeralContent:
        try:
            resp = self.client.get_object(Bucket=self.cfg.bucket, Key=key)
            data = resp["Body"].read()
        except ClientError as e:
            if _is_not_found(e):
                raise DataNotFound(f"No content stored under {key}", {"key": key}) from e
            raise StorageError(f"Failed to fetch content {key}: {e}", {"key": key}) from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to fetch content {key}: {e}", {"key": key}) from e

        name = resp.get("Metadata", {}).get("name")
        return EphemeralContent(data=data, name=unquote(name) if name else None)

    def exists(self, key: str) -> bool:
        try:
            self.client.head_object(Bucket=self.cfg.bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise StorageError(f"Failed to look up content {key}: {e}", {"key": key}) from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to look up content {key}: {e}", {"key": key}) from e
        return True

    def destroy(self, key: str) -> None:
        # delete_object succeeds for absent keys, so check first
        if not self.exists(key):
            raise DataNotFound(f"No content stored under {key}", {"key": key})
        try:
            self.client.delete_object(Bucket=self.cfg.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to destroy content {key}: {e}", {"key": key}) from e

        logger.debug(f"Destroyed s3://{self.cfg.bucket}/{key}")

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            close()
