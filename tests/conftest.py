from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app, get_history_store, get_messenger, get_responder
from config.settings import Settings, get_settings
from relay.core.memory import InMemoryHistoryStore
from tests.fakes import FakeMessenger, FakeResponder, make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> InMemoryHistoryStore:
    return InMemoryHistoryStore()


@pytest.fixture
def responder() -> FakeResponder:
    return FakeResponder()


@pytest.fixture
def messenger() -> FakeMessenger:
    return FakeMessenger()


@pytest.fixture
def override_deps(settings, store):
    def _apply(responder, messenger):
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_history_store] = lambda: store
        app.dependency_overrides[get_responder] = lambda: responder
        app.dependency_overrides[get_messenger] = lambda: messenger

    try:
        yield _apply
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(override_deps, responder, messenger):
    override_deps(responder, messenger)
    return TestClient(app)
