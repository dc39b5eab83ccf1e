"""
Document storage for Smithy Docs MCP Server.

Raw Markdown lives in S3 under a fixed corpus prefix. The store exposes
two operations: fetch one document as text, and enumerate keys.
"""

import asyncio
import logging
from typing import Any, Protocol, TYPE_CHECKING

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import DocumentNotFoundError, StorageError

if TYPE_CHECKING:
    from .config import DocsConfig

logger = logging.getLogger(__name__)

# S3 reports a missing key as NoSuchKey on GetObject, 404 on HeadObject
NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def document_key(file_path: str, prefix: str) -> str:
    """
    Build the storage key for a client-supplied relative path.

    Leading separators are stripped so "a/b.md" and "/a/b.md" share a key.
    """
    return f"{prefix}{file_path.lstrip('/')}"


def relative_path(key: str, prefix: str) -> str:
    """Inverse of document_key for keys listed under prefix."""
    return key.removeprefix(prefix)


class DocumentStore(Protocol):
    """Key-addressed document storage."""

    async def get_text(self, key: str) -> str | None:
        ...

    async def list_keys(self, prefix: str) -> list[str]:
        ...


class S3DocumentStore:
    """DocumentStore backed by an S3 bucket."""

    def __init__(
        self,
        bucket_name: str,
        client: Any = None,
        region_name: str | None = None,
        max_keys: int = 0,
    ):
        self.bucket_name = bucket_name
        self.client = client or boto3.client("s3", region_name=region_name)
        self.max_keys = max_keys

    async def get_text(self, key: str) -> str | None:
        """
        Fetch an object and decode it as UTF-8.

        Returns:
            The text, or None if the body is missing or not valid UTF-8

        Raises:
            DocumentNotFoundError: if the key does not exist
            StorageError: on any other S3 failure
        """
        return await asyncio.to_thread(self._get_text, key)

    def _get_text(self, key: str) -> str | None:
        try:
            response = self.client.get_object(Bucket=self.bucket_name, Key=key)
            body = response.get("Body")
            data = body.read() if body is not None else b""
        except ClientError as e:
            error = e.response.get("Error", {})
            if error.get("Code") in NOT_FOUND_CODES:
                raise DocumentNotFoundError(key) from e
            message = error.get("Message") or str(e)
            logger.warning("S3 get_object failed for %s: %s", key, message)
            raise StorageError(message) from e
        except BotoCoreError as e:
            logger.warning("S3 get_object failed for %s: %s", key, e)
            raise StorageError(str(e)) from e

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Object %s is not valid UTF-8", key)
            return None

    async def list_keys(self, prefix: str) -> list[str]:
        """
        List every key under prefix, following ListObjectsV2 pagination.

        Keys come back in S3 order (UTF-8 binary order). When max_keys is
        set the listing stops once that many keys are collected.

        Raises:
            StorageError: if the listing fails
        """
        return await asyncio.to_thread(self._list_keys, prefix)

    def _list_keys(self, prefix: str) -> list[str]:
        keys: list[str] = []
        paginator = self.client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                for obj in page.get("Contents") or []:
                    if obj.get("Key"):
                        keys.append(obj["Key"])
                    if self.max_keys and len(keys) >= self.max_keys:
                        return keys
        except ClientError as e:
            message = e.response.get("Error", {}).get("Message") or str(e)
            logger.warning("S3 list_objects_v2 failed for %s: %s", prefix, message)
            raise StorageError(message) from e
        except BotoCoreError as e:
            logger.warning("S3 list_objects_v2 failed for %s: %s", prefix, e)
            raise StorageError(str(e)) from e
        return keys


def create_document_store(config: "DocsConfig") -> S3DocumentStore:
    """Factory function to create the S3 document store."""
    return S3DocumentStore(
        config.bucket_name,
        region_name=config.aws_region,
        max_keys=config.list_max_keys,
    )
