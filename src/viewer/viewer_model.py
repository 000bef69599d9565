from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from tagging.tag_model import UploadResult

class ViewerState(BaseModel):
    loading: bool = Field(default=False, description='True while an upload request is in flight')
    error: Optional[Dict[str, Any]] = Field(default=None, description='Payload of the last failed upload, cleared on the next attempt')
    results: List[UploadResult] = Field(default=[], description='Uploaded videos in the order their requests resolved')
