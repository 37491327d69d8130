"""Tests for the health check endpoint."""

import json

from django.test import RequestFactory

from core.views import health_check


class TestHealthCheck:
    def test_reports_healthy_with_database(self, db):
        response = health_check(RequestFactory().get("/health/"))

        assert response.status_code == 200
        body = json.loads(response.content)
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["cache"] == "connected"
