"""
===================================================================================
                STORAGE.PY - Where Uploaded PDFs Live Until Indexed
===================================================================================

Two variants, picked with STORAGE_BACKEND:

    local       → the upload is written to UPLOAD_DIR and the job carries
                  its path. API server and worker must share that disk.

    cloudinary  → the upload is staged in UPLOAD_DIR, pushed to Cloudinary
                  as a raw resource, and the job carries the secure URL.
                  The worker downloads it into a temp file
                  (download_to_temp) and deletes that file when done.
===================================================================================
"""

import logging
import os
import random
import tempfile
import time
from dataclasses import dataclass, replace
from typing import Optional

import cloudinary
import cloudinary.uploader
import requests

from pdfchat import config

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


@dataclass(frozen=True)
class UploadedDocument:
    filename: str
    path: Optional[str] = None
    url: Optional[str] = None

    @property
    def location(self) -> Optional[str]:
        return self.url or self.path


def _unique_name(filename: str) -> str:
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{os.path.basename(filename)}-{suffix}"


def save_local(filename: str, data: bytes) -> UploadedDocument:
    os.makedirs(config.UPLOAD_DIR, exist_ok=True)
    path = os.path.join(config.UPLOAD_DIR, _unique_name(filename))
    with open(path, "wb") as f:
        f.write(data)
    logger.info("💾 Saved %s (%d bytes) to %s", filename, len(data), path)
    return UploadedDocument(filename=filename, path=path)


def upload_remote(document: UploadedDocument) -> UploadedDocument:
    """
    📖 Push a Staged File to Cloudinary
    -----------------------------------
    PDFs go up as resource_type="raw"; Cloudinary's image pipeline would
    otherwise try to rasterize them.
    """
    if not (config.CLOUDINARY_CLOUD_NAME and config.CLOUDINARY_API_KEY and config.CLOUDINARY_API_SECRET):
        raise StorageError("Cloudinary credentials are not configured")

    cloudinary.config(
        cloud_name=config.CLOUDINARY_CLOUD_NAME,
        api_key=config.CLOUDINARY_API_KEY,
        api_secret=config.CLOUDINARY_API_SECRET,
        secure=True,
    )
    try:
        result = cloudinary.uploader.upload(
            document.path,
            resource_type="raw",
            folder=config.CLOUDINARY_FOLDER,
        )
    except Exception as e:
        raise StorageError(f"Cloudinary upload failed: {e}") from e

    url = result.get("secure_url")
    if not url:
        raise StorageError("Cloudinary response did not include a secure_url")

    logger.info("☁️ Uploaded %s to %s", document.filename, url)
    return replace(document, url=url)


def store_upload(filename: str, data: bytes) -> UploadedDocument:
    backend = config.STORAGE_BACKEND
    if backend == "local":
        return save_local(filename, data)
    if backend == "cloudinary":
        return upload_remote(save_local(filename, data))
    raise StorageError(f"Unknown storage backend: {backend}")


def download_to_temp(url: str) -> str:
    """Stream a remote PDF into a temp file and return its path."""
    with requests.get(url, stream=True, timeout=config.DOWNLOAD_TIMEOUT) as response:
        response.raise_for_status()

        tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".pdf")
        try:
            with tmp:
                for block in response.iter_content(chunk_size=64 * 1024):
                    if block:
                        tmp.write(block)
        except Exception:
            os.remove(tmp.name)
            raise

    logger.info("⬇️ Downloaded %s to %s", url, tmp.name)
    return tmp.name
