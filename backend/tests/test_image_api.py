"""
API integration tests

These tests exercise the /image endpoints using FastAPI's TestClient with the
upstream image API replaced by a recording transport.
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from conftest import RESULT_URL
from api.image import get_image_transform_service
from config.settings import settings
from main import app
from services.image_transform_service import ImageTransformService
from services.openai_image_service import OpenAIImageService
from services.transformations import PROMPTS


@pytest.fixture
def client():
    """Provide FastAPI test client"""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_upstream(temp_dir):
    """Route the transform endpoint through a given recording upstream"""
    def install(recorder):
        image_service = OpenAIImageService(
            api_key="sk-test",
            api_url="https://upstream.test/v1/images/edits",
            transport=recorder.transport,
        )
        app.dependency_overrides[get_image_transform_service] = lambda: ImageTransformService(
            image_service=image_service, temp_dir=str(temp_dir)
        )
        return recorder
    return install


@pytest.mark.integration
class TestTransformationsEndpoint:
    """Tests for GET /image/transformations"""

    def test_lists_all_four(self, client):
        response = client.get("/image/transformations")

        assert response.status_code == 200
        data = response.json()
        effects = [t["effect"] for t in data["transformations"]]
        assert effects == ["younger", "older", "healthier", "thinner"]

    def test_every_listed_effect_has_a_prompt(self, client):
        data = client.get("/image/transformations").json()

        for transformation in data["transformations"]:
            assert transformation["effect"] in PROMPTS
            assert transformation["name"]
            assert transformation["description"]


@pytest.mark.integration
class TestTransformEndpoint:
    """Tests for POST /image/transform"""

    def test_transform_success(self, client, use_upstream, upstream, jpeg_bytes, temp_dir):
        recorder = use_upstream(upstream())

        response = client.post(
            "/image/transform",
            files={"image": ("photo.jpg", jpeg_bytes, "image/jpeg")},
            data={"transformation": "older"},
        )

        assert response.status_code == 200
        assert response.json() == {"url": RESULT_URL}
        assert len(recorder.requests) == 1
        assert PROMPTS["older"].encode() in recorder.requests[0].content
        assert list(temp_dir.iterdir()) == []

    def test_unknown_transformation(self, client, use_upstream, upstream, jpeg_bytes):
        recorder = use_upstream(upstream())

        response = client.post(
            "/image/transform",
            files={"image": ("photo.jpg", jpeg_bytes, "image/jpeg")},
            data={"transformation": "taller"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["statusCode"] == 400
        assert "taller" in data["message"]
        assert recorder.requests == []

    def test_missing_file(self, client, use_upstream, upstream):
        recorder = use_upstream(upstream())

        response = client.post("/image/transform", data={"transformation": "older"})

        assert response.status_code == 400
        assert response.json()["message"] == "No image file provided"
        assert recorder.requests == []

    def test_missing_transformation(self, client, use_upstream, upstream, png_bytes):
        recorder = use_upstream(upstream())

        response = client.post(
            "/image/transform",
            files={"image": ("photo.png", png_bytes, "image/png")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "No transformation specified"
        assert recorder.requests == []

    def test_rejects_non_raster_mime_type(self, client, use_upstream, upstream, png_bytes):
        recorder = use_upstream(upstream())

        response = client.post(
            "/image/transform",
            files={"image": ("photo.gif", png_bytes, "image/gif")},
            data={"transformation": "older"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only PNG and JPEG images are allowed"
        assert recorder.requests == []

    def test_rejects_upload_over_ceiling(self, client, use_upstream, upstream):
        recorder = use_upstream(upstream())
        oversized = b"\xff\xd8" + b"\x00" * (5 * 1024 * 1024)

        response = client.post(
            "/image/transform",
            files={"image": ("big.jpg", oversized, "image/jpeg")},
            data={"transformation": "older"},
        )

        assert response.status_code == 413
        assert recorder.requests == []

    def test_rejects_small_file_with_huge_dimensions(self, client, use_upstream, upstream, oversized_png_bytes, temp_dir):
        recorder = use_upstream(upstream())

        response = client.post(
            "/image/transform",
            files={"image": ("bomb.png", oversized_png_bytes, "image/png")},
            data={"transformation": "older"},
        )

        assert response.status_code == 413
        data = response.json()
        assert data["statusCode"] == 413
        assert data["error"] == "Payload Too Large"
        assert "dimensions" in data["message"]
        assert recorder.requests == []
        assert list(temp_dir.iterdir()) == []

    def test_upstream_error_message_is_surfaced(self, client, use_upstream, upstream, png_bytes):
        use_upstream(upstream(status_code=500, json_body={"error": {"message": "Upstream exploded"}}))

        response = client.post(
            "/image/transform",
            files={"image": ("photo.png", png_bytes, "image/png")},
            data={"transformation": "younger"},
        )

        assert response.status_code == 502
        assert response.json()["message"] == "Upstream exploded"

    def test_upstream_error_without_message(self, client, use_upstream, upstream, png_bytes):
        use_upstream(upstream(status_code=500, content=b""))

        response = client.post(
            "/image/transform",
            files={"image": ("photo.png", png_bytes, "image/png")},
            data={"transformation": "younger"},
        )

        assert response.status_code == 502
        assert response.json()["message"] == "Image API request failed: 500"

    def test_upstream_missing_url(self, client, use_upstream, upstream, png_bytes):
        use_upstream(upstream(json_body={"data": []}))

        response = client.post(
            "/image/transform",
            files={"image": ("photo.png", png_bytes, "image/png")},
            data={"transformation": "younger"},
        )

        assert response.status_code == 502
        assert response.json()["message"] == "Invalid response from image API"


@pytest.mark.integration
class TestHealthEndpoints:

    def test_root_and_health(self, client):
        assert client.get("/").status_code == 200
        assert client.get("/health").json() == {"status": "healthy"}

    def test_upstream_health_reports_configuration(self, client):
        with patch.object(settings, "OPENAI_API_KEY", "sk-test"):
            data = client.get("/image/health").json()
        assert data["configured"] is True

        with patch.object(settings, "OPENAI_API_KEY", None):
            data = client.get("/image/health").json()
        assert data["configured"] is False
        assert "not set" in data["message"]
