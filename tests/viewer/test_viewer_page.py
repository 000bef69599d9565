"""
Tests for the rendered viewer page
"""

import sys
import threading
from pathlib import Path
import httpx
import pytest
from fastapi.testclient import TestClient

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from main import app, get_viewer_controller
from viewer.viewer_controller import ViewerController
from viewer.videos_client import VideosClient


UPLOAD_RESULT = {
    "secure_url": "https://res.cloudinary.com/demo/video/upload/videos/house.mp4",
    "format": "mp4",
    "info": {
        "categorization": {
            "google_video_tagging": {
                "data": [
                    {"tag": "Living Room", "categories": ["room"], "start_time_offset": 1.2},
                    {"tag": "Kitchen", "categories": ["room"], "start_time_offset": 3.0},
                    {"tag": "Chair", "categories": ["furniture"], "start_time_offset": 4.0},
                    {"tag": "kitchen", "categories": ["room"], "start_time_offset": 10.0},
                ]
            }
        }
    }
}


@pytest.fixture
def videos_responses():
    return []


@pytest.fixture
def controller(videos_responses):
    def handler(request: httpx.Request) -> httpx.Response:
        return videos_responses.pop(0)

    http_client = httpx.Client(base_url="http://testserver", transport=httpx.MockTransport(handler))
    return ViewerController(VideosClient(http_client))


@pytest.fixture
def client(controller):
    app.dependency_overrides[get_viewer_controller] = lambda: controller
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_empty_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Real Estate" in response.text
    assert "No Video Yet. Tap on the button below to add a video." in response.text
    assert "No videos yet" in response.text
    assert "There was a problem" not in response.text


def test_upload_then_render_markers(client, videos_responses):
    videos_responses.append(httpx.Response(201, json={"message": "Success", "result": UPLOAD_RESULT}))

    response = client.post("/upload-video", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    page = client.get("/").text
    assert "No Video Yet." not in page
    assert 'src="https://res.cloudinary.com/demo/video/upload/videos/house.mp4?ap=em"' in page
    assert 'type="video/mp4"' in page
    assert "Location Markers" in page
    assert ">Living Room</button>" in page
    assert "<h2>Kitchen</h2>" in page
    assert ">Kitchen 1</button>" in page
    assert ">kitchen 2</button>" in page
    assert "Chair" not in page
    assert "currentTime = 10.0" in page


def test_failed_upload_shows_problem(client, videos_responses):
    videos_responses.append(httpx.Response(400, json={"message": "Error", "error": {"message": "boom"}}))

    client.post("/upload-video", follow_redirects=False)
    page = client.get("/").text

    assert "There was a problem" in page
    assert "No videos yet" in page


def test_page_while_upload_in_flight():
    entered = threading.Event()
    release = threading.Event()

    def handler(request: httpx.Request) -> httpx.Response:
        entered.set()
        release.wait(timeout=5)
        return httpx.Response(201, json={"message": "Success", "result": UPLOAD_RESULT})

    http_client = httpx.Client(base_url="http://testserver", transport=httpx.MockTransport(handler))
    controller = ViewerController(VideosClient(http_client))
    app.dependency_overrides[get_viewer_controller] = lambda: controller
    client = TestClient(app)

    in_flight = threading.Thread(target=client.post, args=("/upload-video",), kwargs={"follow_redirects": False})
    in_flight.start()
    try:
        assert entered.wait(timeout=5)

        page = client.get("/").text
        assert "Please be patient while the video uploads..." in page
        assert "type=\"submit\" disabled>UPLOAD VIDEO" in page

        response = client.post("/upload-video", follow_redirects=False)
        assert response.status_code == 409
    finally:
        release.set()
        in_flight.join(timeout=5)
        app.dependency_overrides.clear()

    assert controller.state.loading is False
    assert len(controller.state.results) == 1
