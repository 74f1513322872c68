# ============================================================================
# FILE UPLOADER
# ============================================================================
# EPOCH: 1 - FORM INTAKE
# STATUS: Service - Attachment upload to blob storage
# PURPOSE: Store one uploaded file under a unique name, return its public URL
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
File Uploader

Wraps BlobRepository.put for a single UploadedFile:

1. Name the blob "<uuid4 hex>_<original basename>" so names never collide
   and cannot be guessed from the filename alone
2. Write the whole buffer tagged with the file's content type
3. Return the URL built from container + blob name (no lookup)

The Azure SDK call is blocking, so it runs in the default executor.
"""

import asyncio
import contextvars
import functools
import logging
import uuid
from dataclasses import dataclass
from typing import Callable

from core.errors import UploadError
from core.models import UploadedFile
from infrastructure.storage import BlobRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedBlob:
    """Where an uploaded file ended up."""
    blob_name: str
    url: str


def unique_blob_name(filename: str, id_factory: Callable[[], str] = None) -> str:
    """Prefix a filename with a fresh random identifier."""
    id_factory = id_factory or (lambda: uuid.uuid4().hex)
    return f"{id_factory()}_{filename}"


class FileUploader:
    """Uploads submission attachments to one blob container."""

    def __init__(
        self,
        blob_repo: BlobRepository,
        id_factory: Callable[[], str] = None,
    ):
        self.blob_repo = blob_repo
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)

    async def upload(self, upload: UploadedFile) -> UploadedBlob:
        """
        Upload one file.

        Returns:
            UploadedBlob with the stored name and public URL

        Raises:
            UploadError: the storage write failed
        """
        blob_name = unique_blob_name(upload.basename, self._id_factory)
        loop = asyncio.get_running_loop()
        ctx = contextvars.copy_context()
        put = functools.partial(
            ctx.run,
            self.blob_repo.put,
            blob_name,
            upload.data,
            upload.content_type,
        )

        try:
            url = await loop.run_in_executor(None, put)
        except Exception as e:
            raise UploadError(
                f"Failed to upload {upload.filename} as {blob_name}: {e}",
                blob_name=blob_name,
            ) from e

        logger.info(f"Uploaded {upload.filename} ({upload.size} bytes) -> {blob_name}")
        return UploadedBlob(blob_name=blob_name, url=url)

    async def delete(self, blob_name: str) -> bool:
        """Best-effort delete of a previously uploaded blob."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.blob_repo.delete_blob, blob_name)


__all__ = [
    "UploadedBlob",
    "unique_blob_name",
    "FileUploader",
]
