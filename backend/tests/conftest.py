"""
Shared pytest fixtures.

Every test gets its own Flask app bound to a fresh in-memory SQLite
database, so nothing leaks between tests.
"""

import pytest
from flask_jwt_extended import create_access_token

from blockhub import create_app
from blockhub.application.apps import register_app
from blockhub.application.blocks import create_block, create_version
from blockhub.extensions import db as _db
from blockhub.repositories import get_stores


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "packages")

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def stores(app):
    return get_stores()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """Build Authorization headers for an actor and role."""

    def _headers(actor="alice", role="member", email=None):
        token = create_access_token(
            identity=actor,
            additional_claims={"role": role, "email": email or f"{actor}@example.com"},
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_app(app):
    def _make(name="Storefront", actor_id="owner-1", **kwargs):
        return register_app(actor_id=actor_id, name=name, **kwargs)

    return _make


@pytest.fixture
def make_block(make_app):
    def _make(name="Hero Banner", app=None, type="component", category="marketing", actor_id="alice"):
        app = app or make_app()
        return create_block(
            actor_id=actor_id,
            app_id=app.id,
            name=name,
            type=type,
            category=category,
        )

    return _make


@pytest.fixture
def make_version(make_block):
    def _make(block=None, version="1.0.0", region="default", type="config", actor_id="alice", **kwargs):
        block = block or make_block()
        if type == "package":
            kwargs.setdefault("package_url", f"https://cdn.example.com/{block.id}/{version}.zip")
            kwargs.setdefault("package_size", 1024)
        return create_version(
            actor_id=actor_id,
            block_id=block.id,
            version=version,
            type=type,
            region=region,
            changelog=kwargs.pop("changelog", f"Release {version}"),
            config=kwargs.pop("config", '{"theme": "dark"}'),
            **kwargs,
        )

    return _make
