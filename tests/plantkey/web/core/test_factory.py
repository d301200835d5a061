"""Tests for the application factory and lifespan."""

from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from plantkey.web.core.container import Container
from plantkey.web.core.factory import create_app


class TestCreateApp:
    """Test application assembly."""

    def test_uses_given_container(self, app_container):
        """Should attach the provided container to the app."""
        app = create_app(app_container)

        assert isinstance(app, FastAPI)
        assert app.container is app_container

    def test_builds_container_when_missing(self):
        """Should create its own container when none is given."""
        app = create_app()

        assert app.container.declarative_parent is Container

    def test_registers_api_routes(self, app_container):
        """Should mount every router under /api."""
        app = create_app(app_container)

        paths = set(app.openapi()["paths"])
        assert {
            "/api/health/",
            "/api/catalog/{organ}",
            "/api/observe/match",
            "/api/observe/answers",
            "/api/quota",
            "/api/identify",
            "/api/identify/adjust",
        } <= paths


class TestLifespan:
    """Test startup behavior."""

    def test_startup_configures_logging_and_loads_taxonomy(self, app_container, test_config):
        """Should configure structlog and load the taxonomy before serving."""
        app = create_app(app_container)
        with patch("plantkey.web.core.lifespan.configure_structlog") as mock_configure:
            with TestClient(app) as client:
                response = client.get("/api/health/")

        assert response.status_code == 200
        mock_configure.assert_called_once_with(test_config)
        assert len(app_container.taxonomy_store()) == 6
