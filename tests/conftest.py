"""Shared fixtures: in-memory store, fake providers and a wired test client."""

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import create_app
from translator_api import models  # noqa: F401
from translator_api.api import deps
from translator_api.core.config import Settings
from translator_api.core.translator import Translator
from translator_api.crud import comparison_store, translation_store
from translator_api.db.session import Base, get_db


class FakeAdapter:
    def __init__(self, owner, provider, model):
        self.owner = owner
        self.provider = provider
        self.model = model

    def translate(self, text, language):
        self.owner.calls.append((self.provider, self.model, text, language))
        if self.owner.error is not None:
            raise self.owner.error
        return self.owner.reply


class FakeProviders:
    """Adapter factory that records every dispatch instead of calling out."""

    def __init__(self):
        self.calls = []
        self.reply = "Bonjour"
        self.error = None

    def __call__(self, provider, model):
        return FakeAdapter(self, provider, model)


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, DATABASE_URL="sqlite://", HISTORY_LIMIT=5)


@pytest.fixture
def session_factory():
    engine = _memory_engine()
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def broken_session_factory():
    """Sessions over a database whose tables were never created."""
    engine = _memory_engine()
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return translation_store(db)


@pytest.fixture
def compare_store(db):
    return comparison_store(db)


@pytest.fixture
def providers():
    return FakeProviders()


@pytest.fixture
def translator(store, providers, test_settings):
    return Translator(store=store, adapter_factory=providers, config=test_settings)


def _client(factory, providers, config, **kwargs):
    app = create_app(config)

    def override_get_db():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    def override_get_translator(store=Depends(deps.get_translation_store)):
        return Translator(store=store, adapter_factory=providers, config=config)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_settings] = lambda: config
    app.dependency_overrides[deps.get_translator] = override_get_translator
    return TestClient(app, **kwargs)


@pytest.fixture
def client(session_factory, providers, test_settings):
    return _client(session_factory, providers, test_settings)


@pytest.fixture
def broken_client(broken_session_factory, providers, test_settings):
    return _client(broken_session_factory, providers, test_settings)
