from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any, Optional

import aioboto3

from cloud_labs.models.s3 import FileItem
from cloud_labs.services.aws_errors import is_error_code
from cloud_labs.services.config import S3Config


logger = logging.getLogger(__name__)


class S3ServiceError(RuntimeError):
    pass


class S3BucketNotFoundError(S3ServiceError):
    pass


class S3Service:
    def __init__(self, config: S3Config, *, session: Optional[Any] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    @property
    def bucket_name(self) -> str:
        return self._config.bucket_name

    def _client(self) -> Any:
        return self._session.client(
            "s3",
            region_name=self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    async def create_bucket(self) -> bool:
        """Create the configured bucket.

        Returns:
            True when the bucket was created, False when it already belonged to us.
        """

        bucket = self._config.bucket_name
        logger.info("Creating S3 bucket: %s...", bucket)

        kwargs: dict[str, Any] = {"Bucket": bucket}
        # us-east-1 rejects an explicit location constraint.
        if self._config.region_name and self._config.region_name != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._config.region_name}

        try:
            s3_client: Any = self._client()
            async with s3_client as s3:
                await s3.create_bucket(**kwargs)
        except Exception as exc:
            if is_error_code(exc, "BucketAlreadyOwnedByYou"):
                logger.warning("Bucket %s already exists", bucket)
                return False
            logger.exception("S3 create_bucket failed")
            raise S3ServiceError(f"Failed to create S3 bucket (bucket={bucket})") from exc

        logger.info("Bucket %s created successfully", bucket)
        return True

    async def list_files(self, *, prefix: Optional[str] = None) -> list[FileItem]:
        try:
            kwargs: dict[str, Any] = {"Bucket": self._config.bucket_name}
            if prefix:
                kwargs["Prefix"] = prefix

            files: list[FileItem] = []
            s3_client: Any = self._client()
            async with s3_client as s3:
                paginator = s3.get_paginator("list_objects_v2")
                async for page in paginator.paginate(**kwargs):
                    files.extend(FileItem.from_s3_object(o) for o in page.get("Contents", []))

            return files
        except Exception as exc:
            if is_error_code(exc, "NoSuchBucket"):
                raise S3BucketNotFoundError(f"Bucket does not exist: {self._config.bucket_name}") from exc
            logger.exception("S3 list_files failed")
            raise S3ServiceError("Failed to list files from S3") from exc

    async def upload_local_file(self, *, path: Path, key: str, content_type: Optional[str] = None) -> str:
        """Upload a local file to S3.

        Args:
            path: Local file path.
            key: Destination S3 object key.
            content_type: Optional content type override.

        Returns:
            The uploaded object key.
        """

        try:
            if not key:
                raise ValueError("'key' must be provided")
            if not path.exists() or not path.is_file():
                raise FileNotFoundError(str(path))

            body = path.read_bytes()
            effective_content_type = content_type
            if effective_content_type is None:
                guessed, _ = mimetypes.guess_type(str(path))
                effective_content_type = guessed

            extra_args: dict[str, Any] = {}
            if effective_content_type:
                extra_args["ContentType"] = effective_content_type

            s3_client: Any = self._client()
            async with s3_client as s3:
                await s3.put_object(
                    Bucket=self._config.bucket_name,
                    Key=key,
                    Body=body,
                    **extra_args,
                )

            return key
        except Exception as exc:
            logger.exception("S3 upload_local_file failed")
            raise S3ServiceError(f"Failed to upload local file to S3 (key={key})") from exc

    async def delete_file(self, *, key: str) -> None:
        try:
            if not key:
                raise ValueError("'key' must be provided")

            s3_client: Any = self._client()
            async with s3_client as s3:
                await s3.delete_object(Bucket=self._config.bucket_name, Key=key)
        except Exception as exc:
            logger.exception("S3 delete_file failed")
            raise S3ServiceError("Failed to delete file from S3") from exc

    async def delete_bucket(self) -> bool:
        bucket = self._config.bucket_name
        try:
            s3_client: Any = self._client()
            async with s3_client as s3:
                await s3.delete_bucket(Bucket=bucket)
        except Exception as exc:
            if is_error_code(exc, "NoSuchBucket"):
                logger.warning("Bucket %s does not exist", bucket)
                return False
            logger.exception("S3 delete_bucket failed")
            raise S3ServiceError(f"Failed to delete S3 bucket (bucket={bucket})") from exc

        logger.info("Bucket %s deleted successfully", bucket)
        return True

    async def empty_and_delete_bucket(self) -> Optional[list[str]]:
        """Delete every object, then the bucket itself.

        Returns:
            The deleted object keys, or None when the bucket does not exist.
        """

        bucket = self._config.bucket_name
        logger.info("Emptying and deleting S3 bucket: %s...", bucket)

        try:
            files = await self.list_files()
        except S3BucketNotFoundError:
            logger.warning("Bucket %s does not exist", bucket)
            return None

        if not files:
            logger.warning("No objects found in bucket")

        deleted: list[str] = []
        for item in files:
            await self.delete_file(key=item.key)
            logger.info("Deleted object: %s", item.key)
            deleted.append(item.key)

        if not await self.delete_bucket():
            return None
        return deleted
