"""S3 storage using boto3."""

import uuid
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Self
from urllib.parse import urlparse

from pydantic import BaseModel

from todoist_tasks.errors import ErrorKind, TaskError

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

try:
    import boto3
    from botocore.exceptions import ClientError
except ImportError as e:
    _msg = "boto3 is required for S3 support. Install with: uv add 'todoist-tasks[s3]'"
    raise ImportError(_msg) from e


class S3Credentials(BaseModel, frozen=True):
    """Credentials for S3 connection."""

    access_key_id: str
    secret_access_key: str
    region: str = "us-east-1"
    endpoint_url: str | None = None


class S3Params(BaseModel, frozen=True):
    """Parameters for S3 storage."""

    bucket: str
    """Bucket spilled files are uploaded to."""

    prefix: str = ""
    """Key prefix for uploaded files."""

    content_type: str = "application/x-ndjson"
    """Content type of uploaded files."""


class S3Storage:
    """S3 storage for spilled listing results."""

    __slots__: ClassVar[tuple[str, str]] = ("_client", "_params")

    _client: "S3Client"
    _params: S3Params

    def __init__(self, client: "S3Client", params: S3Params) -> None:
        self._client = client
        self._params = params

    @classmethod
    async def connect(cls, credentials: S3Credentials, params: S3Params) -> Self:
        """Create S3 client."""
        try:
            client: S3Client = boto3.client(  # pyright: ignore[reportUnknownMemberType]
                "s3",
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.secret_access_key,
                region_name=credentials.region,
                endpoint_url=credentials.endpoint_url,
            )
            # Verify connection by checking bucket exists
            _ = client.head_bucket(Bucket=params.bucket)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "404":
                msg = f"Bucket '{params.bucket}' not found"
                raise TaskError(msg, kind=ErrorKind.NOT_FOUND, source=e) from e
            msg = f"Failed to connect to S3: {e}"
            raise TaskError(msg, kind=ErrorKind.CONNECTION, source=e) from e
        except Exception as e:
            msg = f"Failed to connect to S3: {e}"
            raise TaskError(msg, kind=ErrorKind.CONNECTION, source=e) from e

        return cls(client, params)

    async def disconnect(self) -> None:
        """Close the S3 client (no-op for boto3)."""

    async def put_file(self, path: Path) -> str:
        """Upload a local file and return its `s3://` URI."""
        key = self._resolve_key(f"{uuid.uuid4().hex}{path.suffix}")
        try:
            with path.open("rb") as body:
                _ = self._client.put_object(
                    Bucket=self._params.bucket,
                    Key=key,
                    Body=body,
                    ContentType=self._params.content_type,
                )
        except ClientError as e:
            msg = f"Failed to put object: {e}"
            raise TaskError(msg, kind=ErrorKind.STORAGE, source=e) from e
        return f"s3://{self._params.bucket}/{key}"

    async def get(self, uri: str) -> bytes:
        """Get object content by `s3://` URI."""
        key = self._key_of(uri)
        try:
            response = self._client.get_object(Bucket=self._params.bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "NoSuchKey":
                msg = f"Object '{key}' not found"
                raise TaskError(msg, kind=ErrorKind.NOT_FOUND, source=e) from e
            msg = f"Failed to get object: {e}"
            raise TaskError(msg, kind=ErrorKind.STORAGE, source=e) from e

    async def delete(self, uri: str) -> None:
        """Delete a stored file by `s3://` URI."""
        key = self._key_of(uri)
        try:
            _ = self._client.delete_object(Bucket=self._params.bucket, Key=key)
        except ClientError as e:
            msg = f"Failed to remove object: {e}"
            raise TaskError(msg, kind=ErrorKind.STORAGE, source=e) from e

    def _key_of(self, uri: str) -> str:
        """Extract the object key from a URI in this storage's bucket."""
        parsed = urlparse(uri)
        if parsed.scheme != "s3" or parsed.netloc != self._params.bucket:
            msg = f"URI '{uri}' does not belong to bucket '{self._params.bucket}'"
            raise TaskError(msg, kind=ErrorKind.STORAGE)
        return parsed.path.lstrip("/")

    def _resolve_key(self, key: str) -> str:
        """Resolve key with prefix if needed."""
        if self._params.prefix and not key.startswith(self._params.prefix):
            return f"{self._params.prefix}{key}"
        return key
