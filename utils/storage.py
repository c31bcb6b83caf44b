"""
Upload storage: Azure Blob Storage when an account is configured, otherwise
the local uploads directory served by the app under /uploads.
"""
import logging
import os
import shutil
import time
import uuid
from typing import Optional

from azure.storage.blob import BlobServiceClient

import config
from exceptions import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".pdf"}

_blob_service: Optional[BlobServiceClient] = None


def _get_blob_service() -> BlobServiceClient:
     global _blob_service
     if _blob_service is None:
          _blob_service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={config.AZURE_STORAGE_ACCOUNT};"
               f"AccountKey={config.AZURE_STORAGE_KEY};"
               f"EndpointSuffix=core.windows.net"
          )
     return _blob_service


def use_blob_storage() -> bool:
     return bool(config.AZURE_STORAGE_ACCOUNT and config.AZURE_STORAGE_KEY)


def file_extension(filename: str) -> str:
     return os.path.splitext(filename or "")[1].lower()


def is_allowed(filename: str) -> bool:
     return file_extension(filename) in ALLOWED_EXTENSIONS


def upload_to_blob(file, container: str, prefix: str):
     ext = file_extension(file.filename)
     filename = f"{prefix}/{uuid.uuid4()}{ext}"
     blob_client = _get_blob_service().get_blob_client(container=container, blob=filename)
     blob_client.upload_blob(file.file, overwrite=True)
     return f"https://{config.AZURE_STORAGE_ACCOUNT}.blob.core.windows.net/{container}/{filename}"


def delete_from_blob(blob_url: str):
     """
     Deletes a file from Azure Blob Storage using its full URL
     """
     path = blob_url.split(".blob.core.windows.net/", 1)[-1]
     container, blob_name = path.split("/", 1)
     blob_client = _get_blob_service().get_blob_client(
          container=container,
          blob=blob_name
     )
     blob_client.delete_blob()


def save_local(file, category: str) -> str:
     directory = os.path.join(config.UPLOAD_DIR, category)
     os.makedirs(directory, exist_ok=True)
     filename = f"{int(time.time())}-{uuid.uuid4().hex[:8]}{file_extension(file.filename)}"
     with open(os.path.join(directory, filename), "wb") as buffer:
          shutil.copyfileobj(file.file, buffer)
     return f"/uploads/{category}/{filename}"


def store_upload(file, category: str) -> str:
     """
     Persist an UploadFile and return its URL.

     category groups files by purpose (profile, identity, compliance...).

     Raises:
          ValidationError: file type outside ALLOWED_EXTENSIONS
     """
     if not file or not file.filename:
          raise ValidationError("No file uploaded")
     if not is_allowed(file.filename):
          raise ValidationError("Only images (jpg, jpeg, png, webp) and PDF files are allowed")
     if use_blob_storage():
          url = upload_to_blob(file, config.AZURE_STORAGE_CONTAINER, category)
     else:
          url = save_local(file, category)
     logger.info("Stored upload %s as %s", file.filename, url)
     return url


def remove_upload(url: Optional[str]) -> None:
     """Best-effort removal of a previously stored upload."""
     if not url:
          return
     try:
          if ".blob.core.windows.net/" in url:
               if use_blob_storage():
                    delete_from_blob(url)
          elif url.startswith("/uploads/"):
               path = os.path.join(config.UPLOAD_DIR, url[len("/uploads/"):])
               if os.path.isfile(path):
                    os.remove(path)
     except Exception as e:
          logger.warning("Could not remove old upload %s: %s", url, e)
