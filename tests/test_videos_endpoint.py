"""
Tests for the /api/videos endpoint
"""

import sys
from pathlib import Path
import pytest
from fastapi.testclient import TestClient

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from main import app, get_upload_gateway
from media.upload_gateway import UploadGateway, UploadError
from tagging.tag_model import UploadResult


UPLOAD_PAYLOAD = {
    "public_id": "videos/navigating-real-estate-with-auto-tagged-markers-demo",
    "format": "mp4",
    "secure_url": "https://res.cloudinary.com/demo/video/upload/videos/house.mp4",
    "info": {
        "categorization": {
            "google_video_tagging": {
                "status": "complete",
                "data": [{"tag": "Living Room", "categories": ["room"], "start_time_offset": 1.2}]
            }
        }
    }
}


class FakeUploadGateway(UploadGateway):
    def __init__(self, error: UploadError = None, payload: dict = None):
        self.error = error
        self.payload = payload or UPLOAD_PAYLOAD
        self.uploaded = []

    def upload(self, media_path: str) -> UploadResult:
        self.uploaded.append(media_path)
        if self.error:
            raise self.error
        return UploadResult.from_payload(self.payload)


@pytest.fixture
def gateway():
    return FakeUploadGateway()


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_upload_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_post_uploads_fixed_video(client, gateway):
    response = client.post("/api/videos")

    assert response.status_code == 201
    assert response.json() == {"message": "Success", "result": UPLOAD_PAYLOAD}
    assert gateway.uploaded == ["repository/videos/house.mp4"]


def test_upstream_failure_returns_400(client, gateway):
    gateway.error = UploadError(message="Invalid Signature", name="AuthorizationRequired", http_code=401)

    response = client.post("/api/videos")

    assert response.status_code == 400
    assert response.json() == {
        "message": "Error",
        "error": {"message": "Invalid Signature", "name": "AuthorizationRequired", "http_code": 401}
    }


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_other_methods_not_allowed(client, gateway, method):
    response = client.request(method, "/api/videos")

    assert response.status_code == 405
    assert response.json() == {"message": "Method Not Allowed"}
    assert gateway.uploaded == []


@pytest.mark.parametrize("method", ["OPTIONS", "TRACE", "PROPFIND"])
def test_remaining_methods_not_allowed(client, gateway, method):
    # TRACE and custom verbs are rejected by the router before reaching the route
    response = client.request(method, "/api/videos")

    assert response.status_code == 405
    assert response.json() == {"message": "Method Not Allowed"}
    assert gateway.uploaded == []


def test_head_not_allowed(client, gateway):
    response = client.head("/api/videos")

    assert response.status_code == 405
    assert gateway.uploaded == []


def test_result_is_upstream_payload_unchanged(client, gateway):
    gateway.payload = {
        **UPLOAD_PAYLOAD,
        "duration": 12,
        "bytes": 2048,
        "info": {
            "categorization": {
                "google_video_tagging": {
                    "status": "complete",
                    "data": [
                        {"tag": "Kitchen", "categories": ["room"], "start_time_offset": 3},
                        {"tag": "Hallway", "categories": ["room"]},
                    ]
                }
            }
        }
    }

    response = client.post("/api/videos")

    assert response.status_code == 201
    result = response.json()["result"]
    assert result == gateway.payload
    assert isinstance(result["duration"], int)
    assert isinstance(result["info"]["categorization"]["google_video_tagging"]["data"][0]["start_time_offset"], int)
