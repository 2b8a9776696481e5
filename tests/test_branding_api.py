"""
API integration tests for the branding endpoints.

Tests the HTTP layer:
- multipart extraction with response schema checks
- fallback and error handling
- contrast and app-id helpers
- metrics counters
"""

import asyncio
import io

import pytest
from fastapi import UploadFile

from branding_picker.api import v1
from branding_picker.services import imaging


class TestBrandingEndpoint:
    """Test the /v1/branding endpoint"""

    def test_solid_red_icon(self, test_client, red_png):
        response = test_client.post(
            "/v1/branding",
            files={"file": ("icon.png", red_png, "image/png")}
        )

        assert response.status_code == 200
        data = response.json()

        assert data["request_id"].startswith("brand-")
        assert data["primary"] == "#ff0000"
        assert data["light"] == "#ff7070"
        assert data["dark"] == "#7a0000"
        assert data["fallback_used"] is False
        assert "#ff7070</color>" in data["snippet"]
        assert "scheme_preference=\"dark\">#7a0000" in data["snippet"]

        debug = data["debug"]
        assert debug["width"] == 64
        assert debug["height"] == 64
        assert debug["sampled_pixels"] == 4096
        assert debug["cluster_count"] == 6
        assert debug["chosen_index"] == 0
        assert debug["clusters"][0]["hex"] == "#ff0000"
        assert debug["clusters"][0]["count"] == 4096

    def test_previews(self, test_client, red_png):
        response = test_client.post(
            "/v1/branding",
            files={"file": ("icon.png", red_png, "image/png")}
        )
        previews = response.json()["previews"]

        assert previews["light"]["hex"] == "#ff7070"
        assert previews["light"]["foreground"] == "#ffffff"
        assert previews["light"]["label"].startswith("#ff7070 (W:")
        assert previews["dark"]["foreground"] == "#ffffff"
        assert previews["dark"]["label"].startswith("#7a0000 (W:")

    def test_transparent_icon_uses_fallback(self, test_client, transparent_png):
        response = test_client.post(
            "/v1/branding",
            files={"file": ("empty.png", transparent_png, "image/png")}
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["primary"], data["light"], data["dark"]) == ("#888888", "#bbbbbb", "#444444")
        assert data["fallback_used"] is True
        assert data["debug"]["cluster_count"] == 0
        assert data["debug"]["chosen_index"] is None

        counters = test_client.get("/v1/metrics").json()["counters"]
        assert counters["branding_fallback_total"] == 1

    def test_svg_unsupported(self, test_client):
        response = test_client.post(
            "/v1/branding",
            files={"file": ("icon.svg", b"<svg></svg>", "image/svg+xml")}
        )
        assert response.status_code == 415

    def test_corrupt_image(self, test_client):
        response = test_client.post(
            "/v1/branding",
            files={"file": ("icon.png", b"not really a png file", "image/png")}
        )
        assert response.status_code == 400

        counters = test_client.get("/v1/metrics").json()["counters"]
        assert counters["branding_failed_total_decode"] == 1

    def test_missing_file(self, test_client):
        response = test_client.post("/v1/branding")
        assert response.status_code == 422


class TestContrastEndpoint:
    """Test the /v1/contrast endpoint"""

    def test_black_white(self, test_client):
        response = test_client.post(
            "/v1/contrast",
            json={"color_a": "#FFFFFF", "color_b": "#000000"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["ratio"] == pytest.approx(21.0)
        assert data["passes_aa"] is True
        assert data["passes_aa_large"] is True

    def test_low_contrast(self, test_client):
        response = test_client.post(
            "/v1/contrast",
            json={"color_a": "#ffffff", "color_b": "#ffff00"}
        )
        data = response.json()
        assert data["ratio"] < 3.0
        assert data["passes_aa"] is False
        assert data["passes_aa_large"] is False

    def test_malformed_hex(self, test_client):
        response = test_client.post(
            "/v1/contrast",
            json={"color_a": "#fff", "color_b": "#000000"}
        )
        assert response.status_code == 422


class TestAppIdEndpoint:
    """Test the /v1/appstream/app-id endpoint"""

    def test_flathub_url(self, test_client):
        response = test_client.get(
            "/v1/appstream/app-id",
            params={"input": "https://flathub.org/en/apps/org.gnome.Glade/"}
        )
        assert response.status_code == 200
        assert response.json() == {
            "app_id": "org.gnome.Glade",
            "appstream_url": "https://flathub.org/api/v2/appstream/org.gnome.Glade",
        }

    def test_blank_input(self, test_client):
        response = test_client.get("/v1/appstream/app-id", params={"input": "   "})
        assert response.status_code == 400


class TestMetricsEndpoint:
    """Test the /v1/metrics endpoint"""

    def test_counts_requests(self, test_client, red_png):
        test_client.post("/v1/branding", files={"file": ("icon.png", red_png, "image/png")})
        summary = test_client.get("/v1/metrics").json()

        assert summary["counters"]["branding_requests_total"] == 1
        assert summary["timing_stats"]["extract_duration_ms"]["count"] == 1
        assert summary["sample_count_stats"]["max"] == 4096.0


class TestOpenApiSchema:
    """Test documented error responses"""

    def test_error_model_documented(self, test_client):
        schema = test_client.get("/openapi.json").json()
        assert "ErrorResponse" in schema["components"]["schemas"]

        branding = schema["paths"]["/v1/branding"]["post"]["responses"]
        assert branding["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert branding["415"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")

        app_id = schema["paths"]["/v1/appstream/app-id"]["get"]["responses"]
        assert "400" in app_id


class TestWorkerThreads:
    """Test that CPU-bound work leaves the event loop"""

    def test_analysis_runs_in_threadpool(self, test_client, red_png, monkeypatch):
        calls = []
        original = v1.run_in_threadpool

        async def recording(func, *args, **kwargs):
            calls.append(func.__name__)
            return await original(func, *args, **kwargs)

        monkeypatch.setattr(v1, "run_in_threadpool", recording)
        response = test_client.post(
            "/v1/branding",
            files={"file": ("icon.png", red_png, "image/png")}
        )

        assert response.status_code == 200
        assert calls == ["analyze_buffer"]

    def test_decode_runs_in_threadpool(self, red_png, monkeypatch):
        calls = []
        original = imaging.run_in_threadpool

        async def recording(func, *args, **kwargs):
            calls.append(func.__name__)
            return await original(func, *args, **kwargs)

        monkeypatch.setattr(imaging, "run_in_threadpool", recording)
        upload = UploadFile(file=io.BytesIO(red_png), filename="icon.png")
        buffer = asyncio.run(imaging.read_image(upload))

        assert buffer.width == 64
        assert calls == ["decode_image_bytes"]
