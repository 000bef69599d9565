"""
Viewer Controller
Holds the session state of the viewer page and orchestrates the
upload-and-display flow.

    idle --upload_video()--> loading --success--> idle (+ result)
                                     --failure--> idle (+ error)
"""

import threading
from typing import List, Optional

import httpx
from pydantic import ValidationError

from logger import logger
from config.config import settings
from tagging.tag_grouper import group_tags
from tagging.tag_model import TagGroup, UploadResult
from viewer.viewer_model import ViewerState
from viewer.videos_client import VideosClient, VideosRequestError


class UploadInProgressError(Exception):
    """Raised when an upload is triggered while another one is in flight"""


class ViewerController:
    def __init__(self, videos_client: VideosClient):
        self.videos_client = videos_client
        self.state = ViewerState()
        self._upload_lock = threading.Lock()

    def upload_video(self) -> Optional[UploadResult]:
        if not self._upload_lock.acquire(blocking=False):
            logger.warning("[VIEWER] Upload already in progress, rejecting trigger")
            raise UploadInProgressError("A video upload is already in progress")

        try:
            self.state.loading = True
            self.state.error = None

            try:
                result = self.videos_client.upload_video()
            except VideosRequestError as e:
                logger.error(f"[VIEWER] Upload request failed with {e.status_code}: {e.payload}")
                self.state.error = e.payload
                return None
            except (httpx.HTTPError, ValidationError) as e:
                logger.error(f"[VIEWER] Upload request failed: {e}")
                self.state.error = {"message": str(e), "name": type(e).__name__}
                return None

            self.state.results.append(result)
            logger.info(f"[VIEWER] Added video {result.secure_url} ({len(self.state.results)} total)")
            return result
        finally:
            self.state.loading = False
            self._upload_lock.release()

    def tag_groups(self, result: UploadResult) -> List[TagGroup]:
        # Recomputed on every render
        return group_tags(result.tag_occurrences(settings.Tagging.NAMESPACE))
