from pydantic import BaseModel
from typing import Any, Dict

class UploadVideoResponse(BaseModel):
    message: str
    result: Dict[str, Any]

class UploadVideoErrorResponse(BaseModel):
    message: str
    error: Dict[str, Any]

class MethodNotAllowedResponse(BaseModel):
    message: str
