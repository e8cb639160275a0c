"""Shared pytest fixtures for all tests."""

import pytest

from pocketledger import create_app
from pocketledger.config import TestConfig


@pytest.fixture
def app():
    """Create an app bound to a fresh in-memory database.

    Yields:
        Flask: Application configured with TestConfig.
    """
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        from pocketledger.extensions import db

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client for the app fixture."""
    return app.test_client()
