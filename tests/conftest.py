import pytest
from fastapi.testclient import TestClient

from main import create_app
from models.generation import GenerationResult
from utils.settings import Settings


class FakeModelClient:
    """Scripted stand-in for the model client.

    `outcomes` are consumed in order; each is a string (returned as text), a
    GenerationResult, or an exception to raise. Once exhausted, `default` is used.
    """

    def __init__(self):
        self.outcomes = []
        self.default = GenerationResult(text="ok")
        self.calls = []

    async def generate(self, request):
        self.calls.append(request)
        outcome = self.outcomes.pop(0) if self.outcomes else self.default
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, str):
            return GenerationResult(text=outcome)
        return outcome


@pytest.fixture
def fake_model():
    return FakeModelClient()


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        openai_api_key=None,
        model_id="test-model",
        max_attempts=3,
        base_delay_ms=0,
        database_dir=tmp_path / "db",
        max_upload_bytes=1024,
    )


@pytest.fixture
def client(app_settings, fake_model):
    app = create_app(app_settings, model_client=fake_model)
    with TestClient(app) as test_client:
        yield test_client
