from typing import Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from logger import logger
from config.config import settings
from media.upload_gateway import UploadGateway, UploadError
from videos.videos_actions_model import *

class VideosActionsHandler:
    def __init__(self, upload_gateway: UploadGateway):
        self.upload_gateway = upload_gateway

    # --- Endpoint Methods ---

    def handle(self, method: str) -> JSONResponse:
        if method.upper() == 'POST':
            return self.upload_video()
        return self.method_not_allowed(method, headers={"Allow": "POST"})

    @staticmethod
    def method_not_allowed(method: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
        logger.warning(f"[VIDEOS_API] Rejected {method} request")
        return JSONResponse(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            content=MethodNotAllowedResponse(message='Method Not Allowed').model_dump(),
            headers=headers
        )

    def upload_video(self) -> JSONResponse:
        try:
            result = self.upload_gateway.upload(settings.Media.VIDEO_PATH)
        except UploadError as e:
            logger.error(f"[VIDEOS_API] Video upload failed: {e.payload}")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=UploadVideoErrorResponse(message='Error', error=e.payload).model_dump()
            )

        logger.info(f"[VIDEOS_API] Video uploaded: {result.secure_url}")
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=UploadVideoResponse(message='Success', result=result.to_payload()).model_dump()
        )
