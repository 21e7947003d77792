"""
Integration Tests for health endpoints.
"""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient


class TestReadiness:
    """Readiness reports the text-generation API without gating on it."""

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_text_generation_not_configured(self, client: AsyncClient):
        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["text_generation"] == {"status": "not_configured"}

    @pytest.mark.asyncio
    async def test_text_generation_reachable(self, app: FastAPI, client: AsyncClient, fake_generator):
        app.state.text_client = fake_generator

        response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["text_generation"] == {
            "status": "configured",
            "reachable": True,
        }

    @pytest.mark.asyncio
    async def test_unreachable_text_generation_does_not_block(
        self, app: FastAPI, client: AsyncClient, fake_generator
    ):
        fake_generator.healthy = False
        app.state.text_client = fake_generator

        response = await client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["text_generation"]["reachable"] is False
