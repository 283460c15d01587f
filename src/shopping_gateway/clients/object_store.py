"""
Client for the object store (S3 API).

Writes task images and lists the image bucket. Locators returned to callers
are built from the public base URL, which may differ from the endpoint the
gateway itself talks to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from shopping_gateway.clients.base import AwsClient, create_boto3_client
from shopping_gateway.core.exceptions import StorageError

if TYPE_CHECKING:
    from shopping_gateway.config import AwsConfig

PUBLIC_READ_ACL = "public-read"


class ObjectStoreClient(AwsClient):
    """Object store wrapper bound to one bucket."""

    service_name = "s3"
    error_type = StorageError

    def __init__(self, client: Any, bucket: str, public_url: str) -> None:
        super().__init__(client)
        self.bucket = bucket
        self.public_url = public_url.rstrip("/")

    @classmethod
    def from_config(cls, aws: AwsConfig, bucket: str) -> ObjectStoreClient:
        """Build a client with path-style addressing, as local emulators require."""
        client = create_boto3_client("s3", aws, s3={"addressing_style": "path"})
        return cls(client, bucket=bucket, public_url=aws.public_url)

    def locator_for(self, key: str) -> str:
        """Return the publicly reachable URL of ``key``."""
        return f"{self.public_url}/{self.bucket}/{key}"

    async def put_image(self, key: str, body: bytes, content_type: str) -> str:
        """
        Store an image with public-read visibility.

        Args:
            key: Object key under the bucket
            body: Raw image bytes
            content_type: MIME type recorded on the object

        Returns:
            Locator of the stored object

        Raises:
            StorageError: If the object store rejects the write
        """
        await self._call(
            "put_object",
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            ACL=PUBLIC_READ_ACL,
        )
        return self.locator_for(key)

    async def list_images(self) -> list[dict[str, Any]]:
        """
        List the bucket, single page only.

        Returns:
            Listing entries, each with an added ``url`` locator
        """
        response = await self._call("list_objects_v2", Bucket=self.bucket)
        # NextContinuationToken is not followed
        contents: list[dict[str, Any]] = response.get("Contents", [])
        return [{**entry, "url": self.locator_for(entry["Key"])} for entry in contents]
