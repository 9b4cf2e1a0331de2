"""Shared test fixtures for the visualizer."""

import pytest

from main import app as flask_app


@pytest.fixture()
def app():
    flask_app.config.update(TESTING=True, SECRET_KEY="test-secret")
    yield flask_app


@pytest.fixture()
def client(app):
    return app.test_client()
