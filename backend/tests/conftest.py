"""
Shared fixtures: in-test PDFs, a throwaway SQLite document store, and an
app wired with mock authentication.
"""
import fitz  # PyMuPDF
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from beach_tracker.config import Settings
from beach_tracker.database import build_engine, build_session_maker, init_db
from beach_tracker.main import create_app
from beach_tracker.services.document_store import DocumentStore
from beach_tracker.services.recommendations import RecommendationService


def make_pdf(*pages: str) -> bytes:
    """Build a PDF with one page per string; newlines become text lines."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


def auth_headers(user_id: str = "user-1") -> dict:
    return {"Authorization": f"Bearer mock-id-token-for-{user_id}"}


class FakeCompletionClient:
    """Stands in for GeminiClient; records prompts and returns a fixed reply."""

    def __init__(self, response_text: str = "[]"):
        self.response_text = response_text
        self.prompts = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.response_text


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        mock_auth_enabled=True,
        secret_key="test-secret",
        gemini_api_key="",
        max_upload_bytes=1024 * 1024,
    )


@pytest_asyncio.fixture
async def store(settings):
    engine = build_engine(settings)
    await init_db(engine)
    yield DocumentStore(build_session_maker(engine))
    await engine.dispose()


@pytest.fixture
def completion_client():
    return FakeCompletionClient(
        '[{"goal": "Learn Kubernetes", "activities": ["Run a local cluster"]}]'
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app, completion_client):
    with TestClient(app) as test_client:
        app.state.recommendation_service = RecommendationService(completion_client)
        yield test_client
