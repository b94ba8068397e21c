"""
Object Storage Service

Uploads binary streams to an S3-compatible object store and returns
absolute URLs for the stored objects.
"""

import logging
from functools import lru_cache
from typing import BinaryIO, Optional
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.errors import ObjectStorageError
from app.schemas.health import ServiceHealth

logger = logging.getLogger(__name__)


class ObjectStorageService:
    """
    Service for storing uploaded files in named containers (S3 buckets).

    Uploading to an existing object name overwrites the stored object.
    """

    def __init__(
        self,
        region: str = settings.AWS_REGION,
        endpoint_url: Optional[str] = settings.STORAGE_ENDPOINT_URL,
        public_base_url: Optional[str] = settings.STORAGE_PUBLIC_BASE_URL,
        default_container: str = settings.STORAGE_CONTAINER,
    ):
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url
        self.default_container = default_container
        self._client = None

    def _get_client(self):
        """
        Get or create the boto3 S3 client.

        boto3 clients are thread-safe, so one client serves all requests.
        """
        if self._client is None:
            self._client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=self.region,
                endpoint_url=self.endpoint_url,
            )
        return self._client

    def get_object_url(self, container: str, object_name: str) -> str:
        """Build the absolute URL of an object."""
        key = quote(object_name)
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{container}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{container}/{key}"
        return f"https://{container}.s3.{self.region}.amazonaws.com/{key}"

    def upload(self, container: str, object_name: str, data: BinaryIO) -> str:
        """
        Upload a stream to a container.

        Args:
            container: Bucket to upload into
            object_name: Key of the stored object
            data: Readable binary stream

        Returns:
            Absolute URL of the stored object

        Raises:
            ObjectStorageError: On network, credential or missing bucket errors
        """
        try:
            self._get_client().upload_fileobj(data, container, object_name)
        except (ClientError, BotoCoreError) as e:
            logger.error("Upload of %s to %s failed: %s", object_name, container, str(e))
            raise ObjectStorageError(f"Failed to upload '{object_name}' to '{container}'") from e

        url = self.get_object_url(container, object_name)
        logger.info("Uploaded %s to %s", object_name, url)
        return url

    def health_check(self) -> ServiceHealth:
        """
        Check that the default container is reachable.

        Returns:
            ServiceHealth indicating the health status of the object store.
        """
        try:
            self._get_client().head_bucket(Bucket=self.default_container)
            return ServiceHealth(
                healthy=True,
                message=f"Container '{self.default_container}' is reachable",
            )
        except ClientError as e:
            return ServiceHealth(
                healthy=False,
                message=f"Container '{self.default_container}' check failed: {str(e)}",
            )
        except Exception as e:  # pylint: disable=broad-except
            return ServiceHealth(
                healthy=False,
                message=f"Object storage check failed: {str(e)}",
            )


@lru_cache
def get_object_storage() -> ObjectStorageService:
    """Provider (singleton) for dependency injection."""
    return ObjectStorageService()
