"""API endpoint tests."""

import base64

import pytest
from fastapi.testclient import TestClient

from app import app
from study_buddy.gemini_client import GeminiError, get_gemini_client
from study_buddy.sample_answers import DEFAULT_ANSWER, SAMPLE_ANSWERS


class StubGemini:
    """Stands in for GeminiClient; records calls, optionally fails."""

    model_name = "gemini-test"
    configured = True

    def __init__(self, answer="Gemini says hi", text="What is 2 + 2?", error=None):
        self.answer = answer
        self.text = text
        self.error = error
        self.questions = []
        self.images = []

    async def generate_answer(self, content):
        self.questions.append(content)
        if self.error:
            raise self.error
        return self.answer

    async def extract_text(self, image, mime_type="image/jpeg"):
        self.images.append((image, mime_type))
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def gemini():
    return StubGemini()


@pytest.fixture
def client(gemini):
    """Create a test client with Gemini stubbed out."""
    app.dependency_overrides[get_gemini_client] = lambda: gemini
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Study Buddy API"
    assert data["endpoints"]["chat"] == "/chat"


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["model"] == "gemini-test"
    assert data["fallback_entries"] == len(SAMPLE_ANSWERS)


def test_chat_uses_gemini_answer(client, gemini):
    response = client.post("/chat", json={"content": "What is the Pythagorean theorem?"})
    assert response.status_code == 200
    assert response.json() == {"answer": "Gemini says hi", "source": "gemini"}
    assert gemini.questions == ["What is the Pythagorean theorem?"]


def test_chat_falls_back_when_gemini_fails(client, gemini):
    gemini.error = GeminiError("Gemini API timeout after 30 seconds")
    response = client.post("/chat", json={"content": "can you explain newton's first law"})
    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "fallback"
    assert data["answer"].startswith("Newton's laws of motion are three fundamental principles")


def test_chat_falls_back_on_unexpected_error(client, gemini):
    gemini.error = RuntimeError("boom")
    response = client.post("/chat", json={"content": "tell me about clouds"})
    assert response.status_code == 200
    assert response.json() == {"answer": DEFAULT_ANSWER, "source": "fallback"}


def test_chat_empty_content_falls_back_to_default(client, gemini):
    gemini.error = GeminiError("Gemini response has no text")
    response = client.post("/chat", json={"content": ""})
    assert response.status_code == 200
    assert response.json()["answer"] == DEFAULT_ANSWER


def test_chat_missing_content_is_client_error(client):
    response = client.post("/chat", json={})
    assert response.status_code == 422


def test_chat_cors_headers(client):
    response = client.post(
        "/chat",
        json={"content": "hi"},
        headers={"Origin": "http://localhost:5173"},
    )
    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")


def test_vision_extracts_text(client, gemini):
    image = base64.b64encode(b"\xff\xd8\xff fake jpeg").decode("ascii")
    response = client.post("/vision", json={"image": image})
    assert response.status_code == 200
    assert response.json() == {"text": "What is 2 + 2?"}
    assert gemini.images == [(b"\xff\xd8\xff fake jpeg", "image/jpeg")]


def test_vision_accepts_data_url(client, gemini):
    image = base64.b64encode(b"png bytes").decode("ascii")
    response = client.post("/vision", json={"image": f"data:image/png;base64,{image}"})
    assert response.status_code == 200
    assert gemini.images == [(b"png bytes", "image/png")]


def test_vision_requires_image(client, gemini):
    response = client.post("/vision", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "No image provided"
    assert gemini.images == []


def test_vision_rejects_bad_base64(client):
    response = client.post("/vision", json={"image": "not base64!!"})
    assert response.status_code == 400


def test_vision_has_no_fallback(client, gemini):
    gemini.error = GeminiError("GEMINI_API_KEY missing")
    image = base64.b64encode(b"img").decode("ascii")
    response = client.post("/vision", json={"image": image})
    assert response.status_code == 500
    assert response.json()["detail"] == "GEMINI_API_KEY missing"


def test_debug_fallback(client):
    response = client.get("/debug/fallback", params={"q": "What caused World War I?"})
    data = response.json()
    assert data["match"] == "exact"
    assert data["answer"].startswith("World War I was caused")

    data = client.get("/debug/fallback", params={"q": "dna replication"}).json()
    assert data["match"] == "keyword"
    assert data["question"] == "What is the central dogma of molecular biology?"

    data = client.get("/debug/fallback", params={"q": "clouds"}).json()
    assert data["match"] == "default"
    assert data["question"] is None
    assert data["answer"] == DEFAULT_ANSWER


def test_debug_gemini_reports_failure(client, gemini):
    gemini.error = GeminiError("GEMINI_API_KEY missing")
    data = client.get("/debug/gemini").json()
    assert data == {"ok": False, "model": "gemini-test", "error": "GEMINI_API_KEY missing"}


def test_chat_page(client):
    response = client.get("/ui")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Study Buddy" in response.text
    assert 'fetch(path' in response.text


def test_chat_page_seeds_welcome_message(client):
    response = client.get("/ui")
    assert '"sender": "bot"' in response.text
    assert "your AI study assistant" in response.text
