"""
Adapter: MinIO Storage Service

IStorageService on MinIO (S3-compatible API) via boto3.
Switching to real S3 only changes the endpoint and credentials.
"""

import hashlib
import logging

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from src.core.exceptions import StorageError
from src.core.interfaces.storage_service import IStorageService, StorageRef

logger = logging.getLogger(__name__)


class MinIOStorageService(IStorageService):
    """Stores document images in a MinIO/S3 bucket."""

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        region: str = "us-east-1",
        client=None,
    ):
        self._bucket = bucket
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            config=BotoConfig(signature_version="s3v4"),
            region_name=region,
        )

    def upload(self, data: bytes, key: str, content_type: str = "application/octet-stream") -> StorageRef:
        digest = hashlib.sha256(data).hexdigest()
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                Metadata={"sha256": digest},
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"MinIO upload failed for {self._bucket}/{key}: {e}")
            raise StorageError(f"Could not store file: {e}") from e

        logger.debug(f"Uploaded {len(data)} bytes to {self._bucket}/{key}")
        return StorageRef(
            bucket=self._bucket,
            key=key,
            size_bytes=len(data),
            sha256=digest,
            content_type=content_type,
        )

    def download(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Could not read {key}: {e}") from e

    def get_url(self, key: str, expires_seconds: int = 3600) -> str:
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self._bucket, "Key": key},
                ExpiresIn=expires_seconds,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Could not sign URL for {key}: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
            return True
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                return False
            raise StorageError(f"Could not delete {key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Could not delete {key}: {e}") from e
