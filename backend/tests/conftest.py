"""Pytest fixtures: application, per-test database and fake Redis.

Each test that asks for ``db`` gets freshly created tables in an in-memory
SQLite database (Flask-SQLAlchemy keeps a single static connection for
``:memory:``), dropped again afterwards. Services commit for real, so the
schema is rebuilt instead of rolling back a SAVEPOINT.
"""

from __future__ import annotations

import os

import fakeredis
import pytest

from account_service.core.config import TestingConfig
from account_service.core.extensions import REDIS_EXTENSION_KEY
from account_service.core.extensions import db as _db
from account_service.factory import create_app
from account_service.infra.security.credential_hasher import CredentialHasher
from account_service.services._shared.ports import StubTokenSigner
from account_service.services.profile.service import ProfileService
from account_service.services.sessions.service import SessionService

DEFAULT_PASSWORD = "Passw0rd!"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Create all tables inside an app context for one test.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application.
    """
    from tests.factories import SQLAlchemySession

    with app.app_context():
        _db.create_all()
        SQLAlchemySession.set(_db.session)
        try:
            yield _db
        finally:
            SQLAlchemySession.set(None)
            _db.session.remove()
            _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session the services also use."""
    return db.session


@pytest.fixture()
def fake_redis(app):
    """Install a fresh FakeRedis client as the app's fast store."""
    r = fakeredis.FakeRedis()
    r.flushall()
    app.extensions[REDIS_EXTENSION_KEY] = r
    try:
        yield r
    finally:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)


@pytest.fixture()
def client(app, db, fake_redis):
    """Flask test client running against the per-test database and fake Redis."""
    return app.test_client()


@pytest.fixture()
def hasher(app) -> CredentialHasher:
    return CredentialHasher(app.config["PASSWORD_SALT"])


@pytest.fixture()
def profile_service(app, db) -> ProfileService:
    return ProfileService(payment_token=app.config["PAYMENT_MOCK_TOKEN"])


@pytest.fixture()
def session_service(db, hasher, profile_service) -> SessionService:
    """SessionService wired to a stub signer and the real repositories."""
    return SessionService(
        token_signer=StubTokenSigner(),
        hasher=hasher,
        profile=profile_service,
    )


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk
