from typing import Any, Dict, Optional

import httpx

from logger import logger
from config.config import settings
from tagging.tag_model import UploadResult


class VideosRequestError(Exception):
    """Non-2xx response from the videos endpoint"""

    def __init__(self, status_code: int, payload: Dict[str, Any]):
        super().__init__(f"Videos endpoint responded with {status_code}: {payload}")
        self.status_code = status_code
        self.payload = payload


class VideosClient:
    """Calls the videos endpoint that uploads and tags the showcase video"""

    def __init__(self, http_client: Optional[httpx.Client] = None):
        # Uploads are not bounded in time
        self.http_client = http_client or httpx.Client(
            base_url=settings.Viewer.API_BASE_URL,
            timeout=None
        )

    def upload_video(self) -> UploadResult:
        logger.info(f"[VIEWER] POST {settings.Viewer.VIDEOS_ENDPOINT}")
        response = self.http_client.post(settings.Viewer.VIDEOS_ENDPOINT)

        if not response.is_success:
            raise VideosRequestError(response.status_code, self._error_payload(response))

        try:
            result = response.json()["result"]
        except (ValueError, KeyError, TypeError) as e:
            raise VideosRequestError(
                response.status_code,
                {"message": "Malformed upload response", "name": type(e).__name__, "body": response.text}
            ) from e

        return UploadResult.from_payload(result)

    @staticmethod
    def _error_payload(response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {"message": response.text}
        return payload if isinstance(payload, dict) else {"message": payload}
