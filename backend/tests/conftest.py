"""
Pytest configuration and shared fixtures.
"""

import pytest
from flask_jwt_extended import create_access_token

from sitebuilder import create_app
from sitebuilder.extensions import db
from sitebuilder.utils.decorators import role_claims

NOW = "2024-01-31T12:00:00.000Z"


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database."""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers(app):
    token = create_access_token(identity="admin-1", additional_claims=role_claims())
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(app):
    token = create_access_token(identity="editor-1", additional_claims=role_claims("editor"))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def now():
    """Fixed timestamp for deterministic normalization."""
    return NOW
