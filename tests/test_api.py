from fastapi.testclient import TestClient

from pdfqa.exceptions import ExtractionFailed
from pdfqa.main import create_app
from pdfqa.services import NO_MATCHES_ANSWER

from conftest import FakeExtractor, make_match


PDF_FILE = {"document": ("report.pdf", b"%PDF-1.4 fake", "application/pdf")}


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Backend running successfully!"}


def test_upload_document(client, extractor, index):
    response = client.post("/upload-document", files=PDF_FILE)

    assert response.status_code == 200
    assert response.json() == {"message": "Document processed and indexed successfully."}
    assert extractor.calls == [b"%PDF-1.4 fake"]
    assert all(vector.metadata["source"] == "report.pdf" for vector in index.stored)


def test_upload_without_document_is_rejected(client, extractor):
    response = client.post("/upload-document")

    assert response.status_code == 400
    assert response.json() == {"error": "No document uploaded."}
    assert extractor.calls == []


def test_upload_with_other_field_only_is_rejected(client):
    response = client.post("/upload-document", files={"file": ("report.pdf", b"%PDF", "application/pdf")})

    assert response.status_code == 400
    assert response.json() == {"error": "No document uploaded."}


def test_upload_too_large_is_rejected(client, extractor):
    big = b"0" * (1024 * 1024 + 1)
    response = client.post("/upload-document", files={"document": ("big.pdf", big, "application/pdf")})

    assert response.status_code == 400
    assert "too large" in response.json()["error"]
    assert extractor.calls == []


def test_upload_pipeline_failure_returns_500(client, ingestion_service):
    ingestion_service.extractor = FakeExtractor(error=ExtractionFailed("PDF parsing failed: EOF marker not found"))

    response = client.post("/upload-document", files=PDF_FILE)

    assert response.status_code == 500
    assert response.json() == {"error": "Error processing document: PDF parsing failed: EOF marker not found"}


def test_upload_blank_document_returns_500(client, ingestion_service):
    ingestion_service.extractor = FakeExtractor(text="   ")

    response = client.post("/upload-document", files=PDF_FILE)

    assert response.status_code == 500
    assert response.json()["error"].startswith("Error processing document: ")


def test_ask_question_returns_answer(client, index, completions):
    index.matches = [make_match(0, "The answer lives here.")]

    response = client.post("/ask-question", json={"question": "Where does the answer live?"})

    assert response.status_code == 200
    assert response.json() == {"answer": completions.answer}
    assert len(completions.prompts) == 1


def test_ask_question_without_matches_returns_fallback(client, completions):
    response = client.post("/ask-question", json={"question": "Anything?"})

    assert response.status_code == 200
    assert response.json() == {"answer": NO_MATCHES_ANSWER}
    assert completions.prompts == []


def test_ask_empty_question_is_rejected(client, embeddings):
    response = client.post("/ask-question", json={"question": ""})

    assert response.status_code == 400
    assert response.json() == {"error": "Question is required."}
    assert embeddings.one_calls == []


def test_ask_blank_question_is_rejected(client):
    response = client.post("/ask-question", json={"question": "   "})
    assert response.status_code == 400


def test_ask_missing_question_is_rejected(client):
    response = client.post("/ask-question", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Question is required."}


def test_ask_without_body_is_rejected(client):
    response = client.post("/ask-question")
    assert response.status_code == 400


def test_ask_with_malformed_body_is_rejected(client):
    response = client.post(
        "/ask-question",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_ask_pipeline_failure_returns_500(client, index):
    index.error = RuntimeError("index unreachable")

    response = client.post("/ask-question", json={"question": "What?"})

    assert response.status_code == 500
    assert response.json() == {"error": "Error answering question: query failed: index unreachable"}


def test_health_reports_vector_index(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["vector_index"]["collection_name"] == "test"


def test_health_unhealthy_index_returns_503(client, index):
    index.health = {"status": "unhealthy", "error": "connection refused"}

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_startup_builds_missing_services(monkeypatch, ingestion_service, qa_service, test_settings):
    built = []

    def fake_build(config):
        built.append(config)
        return ingestion_service, qa_service

    monkeypatch.setattr("pdfqa.main.build_services", fake_build)
    app = create_app(config=test_settings)

    with TestClient(app) as client:
        assert client.get("/").status_code == 200
        assert app.state.qa_service is qa_service

    assert built == [test_settings]
