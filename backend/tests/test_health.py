"""Tests for health and root endpoints."""

import pytest


class TestHealthEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_root(self, async_client):
        response = await async_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "IVR Flow Studio API"
        assert data["docs"] == "/docs"

    @pytest.mark.asyncio
    async def test_api_status(self, async_client):
        response = await async_client.get("/api/v1/status")

        assert response.json() == {"status": "ok", "version": "v1"}

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_body(self, async_client):
        response = await async_client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestOpenApiErrors:
    @pytest.mark.asyncio
    async def test_error_statuses_document_error_body(self, async_client):
        schema = (await async_client.get("/api/v1/openapi.json")).json()

        assert schema["components"]["schemas"]["ErrorResponse"]["required"] == ["error"]
        ref = "#/components/schemas/ErrorResponse"
        get_flow = schema["paths"]["/api/v1/flows/{flow_id}"]["get"]["responses"]
        for code in ("401", "403", "404"):
            assert get_flow[code]["content"]["application/json"]["schema"]["$ref"] == ref
        put_flow = schema["paths"]["/api/v1/flows/{flow_id}"]["put"]["responses"]
        assert put_flow["409"]["content"]["application/json"]["schema"]["$ref"] == ref
        login = schema["paths"]["/api/v1/auth/login"]["post"]["responses"]
        assert login["401"]["content"]["application/json"]["schema"]["$ref"] == ref
