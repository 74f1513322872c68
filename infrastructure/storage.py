# ============================================================================
# BLOB STORAGE INFRASTRUCTURE
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Infrastructure - Azure Blob Storage operations
# PURPOSE: Store submission attachments and build their public URLs
# CREATED: 18 OCT 2026
# ============================================================================
"""
Blob Storage Infrastructure

Provides BlobRepository for Azure Blob Storage operations:
- put: Write a byte buffer to a blob and return its public URL
- public_url: Build the public URL of a blob (no network call)
- delete_blob: Delete a blob
- container_exists: Container reachability for health probes

Authentication, in order of preference:
1. AZURE_STORAGE_CONNECTION_STRING (local Azurite, account keys)
2. ManagedIdentityCredential when AZURE_CLIENT_ID is set
3. DefaultAzureCredential
"""

import os
import time
import logging
import threading
from typing import Any, Dict, Optional
from urllib.parse import quote

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from core.config import StorageDefaults, get_defaults

logger = logging.getLogger(__name__)


# ============================================================================
# BLOB REPOSITORY
# ============================================================================

class BlobRepository:
    """
    Azure Blob Storage repository for one container.

    Azure clients are created lazily on first use, so constructing a
    repository never touches the network.

    Usage:
        repo = BlobRepository.from_defaults()
        url = repo.put("uuid_proposal.pdf", data, "application/pdf")
    """

    def __init__(
        self,
        container: str,
        account_name: Optional[str] = None,
        connection_string: Optional[str] = None,
        public_base_url: Optional[str] = None,
    ):
        if not account_name and not connection_string:
            raise ValueError(
                "BlobRepository requires an account_name or a connection_string. "
                "Set INTAKE_STORAGE_ACCOUNT or AZURE_STORAGE_CONNECTION_STRING."
            )

        self.container = container
        self.account_name = account_name
        self._connection_string = connection_string
        self._public_base_url = public_base_url

        self._blob_service: Optional[BlobServiceClient] = None
        self._credential = None
        self._container_client = None
        self._client_lock = threading.Lock()

        logger.info(
            f"BlobRepository initialized for container '{container}' "
            f"(account={account_name or 'connection-string'})"
        )

    @classmethod
    def from_defaults(cls, defaults: Optional[StorageDefaults] = None) -> "BlobRepository":
        """Build a repository from StorageDefaults (environment by default)."""
        defaults = defaults or get_defaults().storage
        return cls(
            container=defaults.container,
            account_name=defaults.account_name,
            connection_string=defaults.connection_string,
            public_base_url=defaults.public_base_url,
        )

    # ========================================================================
    # AZURE CLIENT INITIALIZATION
    # ========================================================================

    def _get_credential(self):
        """Get Azure credential (lazy initialization)."""
        if self._credential is None:
            client_id = os.environ.get("AZURE_CLIENT_ID")
            if client_id:
                from azure.identity import ManagedIdentityCredential
                self._credential = ManagedIdentityCredential(client_id=client_id)
                logger.debug("ManagedIdentityCredential initialized with client_id")
            else:
                from azure.identity import DefaultAzureCredential
                self._credential = DefaultAzureCredential()
                logger.debug("DefaultAzureCredential initialized")
        return self._credential

    def _get_blob_service(self) -> BlobServiceClient:
        """Get BlobServiceClient (lazy initialization)."""
        if self._blob_service is None:
            if self._connection_string:
                self._blob_service = BlobServiceClient.from_connection_string(
                    self._connection_string
                )
                logger.debug("BlobServiceClient initialized from connection string")
            else:
                account_url = f"https://{self.account_name}.blob.core.windows.net"
                self._blob_service = BlobServiceClient(
                    account_url=account_url,
                    credential=self._get_credential(),
                )
                logger.debug(f"BlobServiceClient initialized for {account_url}")
        return self._blob_service

    def _get_container_client(self):
        """Get the cached container client (thread-safe)."""
        if self._container_client is not None:
            return self._container_client

        with self._client_lock:
            if self._container_client is None:
                self._container_client = self._get_blob_service().get_container_client(
                    self.container
                )
                logger.debug(f"Created container client for: {self.container}")
            return self._container_client

    # ========================================================================
    # URLS
    # ========================================================================

    @property
    def base_url(self) -> str:
        """Scheme + host that public URLs are built on."""
        if self._public_base_url:
            return self._public_base_url.rstrip("/")
        if self.account_name:
            return f"https://{self.account_name}.blob.core.windows.net"
        # Connection-string accounts (Azurite) carry their own endpoint
        return self._get_blob_service().url.rstrip("/")

    def public_url(self, blob_name: str) -> str:
        """Build the public URL for a blob from container and name."""
        return f"{self.base_url}/{self.container}/{quote(blob_name)}"

    # ========================================================================
    # WRITE OPERATIONS
    # ========================================================================

    def put(
        self,
        blob_name: str,
        data: bytes,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Write a full byte buffer to a blob tagged with its content type.

        Args:
            blob_name: Destination blob name within the container
            data: Bytes to store
            content_type: MIME type recorded on the blob
            metadata: Optional blob metadata

        Returns:
            Public URL of the stored blob

        Raises:
            AzureError: Any storage failure (logged, then re-raised)
        """
        size_mb = len(data) / (1024 * 1024)
        logger.info(
            f"PUT_BLOB starting: {self.container}/{blob_name} "
            f"({size_mb:.2f}MB, {content_type})"
        )
        start_time = time.time()

        try:
            blob_client = self._get_container_client().get_blob_client(blob_name)
            blob_client.upload_blob(
                data,
                overwrite=False,
                content_settings=ContentSettings(content_type=content_type),
                metadata=metadata,
                length=len(data),
            )
        except AzureError as e:
            logger.error(f"PUT_BLOB failed for {self.container}/{blob_name}: {e}")
            raise

        duration = time.time() - start_time
        logger.info(f"PUT_BLOB complete: {blob_name} in {duration:.2f}s")
        return self.public_url(blob_name)

    def delete_blob(self, blob_name: str) -> bool:
        """Delete a blob. Returns True if deleted, False if not found or failed."""
        try:
            self._get_container_client().get_blob_client(blob_name).delete_blob()
            logger.info(f"Deleted blob: {self.container}/{blob_name}")
            return True
        except AzureError as e:
            logger.warning(f"Failed to delete blob {self.container}/{blob_name}: {e}")
            return False

    # ========================================================================
    # UTILITY METHODS
    # ========================================================================

    def container_exists(self) -> bool:
        """Check that the configured container is reachable."""
        try:
            self._get_container_client().get_container_properties()
            return True
        except ResourceNotFoundError:
            return False

    def describe(self) -> Dict[str, Any]:
        """Configuration summary for logs and health output."""
        return {
            "container": self.container,
            "account_name": self.account_name,
            "auth": "connection_string" if self._connection_string else "credential",
        }


# ============================================================================
# FACTORY
# ============================================================================

_blob_repository: Optional[BlobRepository] = None


def get_blob_repository() -> BlobRepository:
    """Get or create the process-wide BlobRepository."""
    global _blob_repository
    if _blob_repository is None:
        _blob_repository = BlobRepository.from_defaults()
    return _blob_repository


def set_blob_repository(repo: Optional[BlobRepository]) -> None:
    """Replace the process-wide BlobRepository (startup wiring and tests)."""
    global _blob_repository
    _blob_repository = repo


__all__ = [
    "BlobRepository",
    "get_blob_repository",
    "set_blob_repository",
]
