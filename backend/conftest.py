from typing import Optional

import pytest
from fastapi.testclient import TestClient

from appbuilder.api.routes import get_generation_service
from appbuilder.config import Settings
from appbuilder.main import create_app
from appbuilder.service import AppGenerationService

from fakes import DummyClient


@pytest.fixture
def settings() -> Settings:
    return Settings(anthropic_api_key="test-key")


@pytest.fixture
def make_api(settings):
    """Build a TestClient whose generation service uses a DummyClient."""

    def _make(dummy: DummyClient, app_settings: Optional[Settings] = None, **client_kwargs) -> TestClient:
        resolved = app_settings or settings
        app = create_app(resolved)
        app.dependency_overrides[get_generation_service] = lambda: AppGenerationService(
            resolved, client=dummy
        )
        return TestClient(app, **client_kwargs)

    return _make
