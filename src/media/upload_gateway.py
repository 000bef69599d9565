"""
Upload Gateway
Uploads the showcase video to Cloudinary with Google video tagging enabled
and returns the parsed upload result.
"""

from typing import Any, Dict, Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from pydantic import ValidationError

from logger import logger
from config.config import settings
from gcp.secret import secret_mgr
from tagging.tag_model import UploadResult


class UploadError(Exception):
    """Upstream failure while uploading or tagging the video"""

    def __init__(self, message: str, name: str = 'Error', http_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.name = name
        self.http_code = http_code

    @classmethod
    def from_exception(cls, exc: Exception) -> 'UploadError':
        return cls(
            message=str(exc),
            name=type(exc).__name__,
            http_code=getattr(exc, 'http_code', None)
        )

    @property
    def payload(self) -> Dict[str, Any]:
        payload = {"message": self.message, "name": self.name}
        if self.http_code is not None:
            payload["http_code"] = self.http_code
        return payload


class UploadGateway:
    """Boundary to the external tagging service"""

    def upload(self, media_path: str) -> UploadResult:
        raise NotImplementedError


class CloudinaryUploadGateway(UploadGateway):

    def __init__(self):
        cloudinary.config(
            cloud_name=secret_mgr.secret(settings.Secret.CLOUDINARY_CLOUD_NAME),
            api_key=secret_mgr.secret(settings.Secret.CLOUDINARY_API_KEY),
            api_secret=secret_mgr.secret(settings.Secret.CLOUDINARY_API_SECRET),
            secure=True
        )

    @staticmethod
    def upload_options() -> Dict[str, Any]:
        return {
            "folder": settings.Upload.FOLDER,
            "public_id": settings.Upload.PUBLIC_ID,
            "resource_type": settings.Upload.RESOURCE_TYPE,
            "categorization": settings.Upload.CATEGORIZATION,
            "auto_tagging": settings.Upload.AUTO_TAGGING,
        }

    def upload(self, media_path: str) -> UploadResult:
        logger.info(f"[UPLOAD_GATEWAY] Uploading {media_path} to folder '{settings.Upload.FOLDER}'")
        try:
            response = cloudinary.uploader.upload(media_path, **self.upload_options())
        except (CloudinaryError, OSError) as e:
            logger.error(f"[UPLOAD_GATEWAY] Upload of {media_path} failed: {e}")
            raise UploadError.from_exception(e) from e

        try:
            result = UploadResult.from_payload(response)
        except ValidationError as e:
            logger.error(f"[UPLOAD_GATEWAY] Unexpected upload response for {media_path}: {e}")
            raise UploadError(message=str(e), name='InvalidUploadResponse') from e

        logger.info(f"[UPLOAD_GATEWAY] Uploaded {media_path} as {result.public_id} ({result.secure_url})")
        return result
