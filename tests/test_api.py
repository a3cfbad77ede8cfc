"""
Tests for the terrain map HTTP API.
"""

import io
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from py_terrain.api.main import app


class TestAPIEndpoints:
    """Test the API endpoints."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def test_root(self):
        response = self.client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self):
        response = self.client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_default_configuration(self):
        response = self.client.get("/config/default")

        assert response.status_code == 200
        data = response.json()
        assert data["scale"] == 125.0
        assert data["lacunarity"] == 2.0
        assert data["persistence"] == 0.5
        assert data["octaves"] == 5
        assert data["sand"] == [255, 228, 110]
        assert data["snow"] == [230, 232, 237]

    def test_generate_returns_png(self):
        response = self.client.post("/maps/generate", json={"seed": 42})

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["x-terrain-seed"] == "42"

        image = Image.open(io.BytesIO(response.content))
        assert image.size == (750, 500)
        assert image.mode == "RGB"

    def test_generate_same_seed_same_image(self):
        first = self.client.post("/maps/generate", json={"seed": 7, "octaves": 3})
        second = self.client.post("/maps/generate", json={"seed": 7, "octaves": 3})

        assert first.content == second.content

    def test_generate_without_seed_reports_seed(self):
        response = self.client.post("/maps/generate", json={})

        assert response.status_code == 200
        assert int(response.headers["x-terrain-seed"]) >= 0

    def test_statistics(self):
        response = self.client.post(
            "/maps/statistics", json={"seed": 11, "sand": [1, 2, 3]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["seed"] == 11
        assert data["width"] == 750
        assert data["height"] == 500
        assert data["total_pixels"] == 375000
        assert len(data["bands"]) == 8
        assert sum(band["pixel_count"] for band in data["bands"]) == 375000
        assert sum(band["percentage"] for band in data["bands"]) == pytest.approx(100, abs=0.1)

        by_name = {band["band"]: band for band in data["bands"]}
        assert by_name["Sand"]["color"] == [1, 2, 3]
        assert by_name["Low Grass"]["color"] == [23, 140, 22]

    @pytest.mark.parametrize(
        "payload",
        [
            {"octaves": 0},
            {"scale": 0},
            {"persistence": -0.5},
            {"lacunarity": 0},
            {"sand": [256, 0, 0]},
            {"rock": [1, 2]},
            {"seed": -1},
        ],
    )
    def test_invalid_request_rejected(self, payload):
        response = self.client.post("/maps/generate", json=payload)

        assert response.status_code == 422

    @patch("py_terrain.api.main.TerrainGenerator")
    def test_generation_failure_returns_500(self, mock_generator):
        mock_generator.return_value.generate.side_effect = RuntimeError("boom")

        response = self.client.post("/maps/statistics", json={"seed": 1})

        assert response.status_code == 500
        assert response.json()["detail"] == "Terrain generation failed"
