from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from llm_gateway.api.app import app

client = TestClient(app)


def _openai_stub(monkeypatch, reply=None, error=None):
    class Stub:
        def __init__(self, **kwargs):
            pass

        def invoke(self, messages):
            if error is not None:
                raise error
            return reply

    monkeypatch.setattr("llm_gateway.providers.openai_client.ChatOpenAI", Stub)


def _ollama_stub(monkeypatch, responses):
    captured = {}

    def factory(**kwargs):
        captured.update(kwargs)
        return FakeListChatModel(responses=responses)

    monkeypatch.setattr("llm_gateway.providers.ollama_client.ChatOllama", factory)
    return captured


def test_llm_endpoint_missing_user_message():
    resp = client.post("/llm-endpoint", json={"systemMessage": "s", "config": {"modelName": "m"}})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Missing required parameters"}


def test_llm_endpoint_invalid_json():
    resp = client.post("/llm-endpoint", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing required parameters"


def test_llm_endpoint_success_with_usage(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(
        content="ok",
        usage_metadata={"input_tokens": 10, "output_tokens": 5, "total_tokens": 15},
    ))
    resp = client.post("/llm-endpoint", json={
        "systemMessage": "s",
        "userMessage": "u",
        "config": {"llmType": "openai", "modelName": "gpt-4o", "apiKey": "sk-test"},
    })
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "response": "ok",
        "tokenUsage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def test_llm_endpoint_ollama_has_no_usage(monkeypatch):
    _ollama_stub(monkeypatch, ["local reply"])
    resp = client.post("/llm-endpoint", json={
        "systemMessage": "s",
        "userMessage": "u",
        "config": {"llmType": "ollama", "modelName": "llama3", "baseUrl": "localhost:11434"},
    })
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "response": "local reply"}


def test_llm_endpoint_provider_failure(monkeypatch):
    _openai_stub(monkeypatch, error=RuntimeError("connection refused"))
    resp = client.post("/llm-endpoint", json={
        "systemMessage": "s",
        "userMessage": "u",
        "config": {"llmType": "openai", "modelName": "gpt-4o"},
    })
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "connection refused"}


def test_llm_endpoint_failure_without_message(monkeypatch):
    _openai_stub(monkeypatch, error=RuntimeError())
    resp = client.post("/llm-endpoint", json={
        "systemMessage": "s",
        "userMessage": "u",
        "config": {"llmType": "openai", "modelName": "gpt-4o"},
    })
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Failed to process LLM request"}


def test_llm_endpoint_empty_model_is_validation_error():
    resp = client.post("/llm-endpoint", json={
        "systemMessage": "s",
        "userMessage": "u",
        "config": {"llmType": "openai", "modelName": ""},
    })
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Model name is required"}


def test_llm_endpoint_unknown_llm_type_is_validation_error():
    resp = client.post("/llm-endpoint", json={
        "systemMessage": "s",
        "userMessage": "u",
        "config": {"llmType": "anthropic", "modelName": "claude"},
    })
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Unsupported LLM type: anthropic"}


def test_llm_endpoint_ollama_invalid_output(monkeypatch):
    _ollama_stub(monkeypatch, ["local reply"])
    monkeypatch.setattr(
        "llm_gateway.providers.ollama_client.StrOutputParser",
        lambda: RunnableLambda(lambda message: [message.content]),
    )
    resp = client.post("/llm-endpoint", json={
        "systemMessage": "s",
        "userMessage": "u",
        "config": {"llmType": "ollama", "modelName": "llama3"},
    })
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Invalid response from LLM"}


def test_test_endpoint_missing_fields():
    resp = client.post("/test-endpoint", json={"llmType": "ollama", "model": "llama3"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Missing required parameters"}


def test_test_endpoint_ollama_end_to_end(monkeypatch):
    captured = _ollama_stub(monkeypatch, ["hello"])
    resp = client.post("/test-endpoint", json={"llmType": "ollama", "baseUrl": "11434", "model": "llama3"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Model test successful", "response": "hello"}
    assert captured["base_url"] == "http://localhost:11434"
    assert captured["temperature"] == 0.1
    assert captured["client_kwargs"] == {"timeout": 30.0}


def test_test_endpoint_empty_response(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(content=""))
    resp = client.post("/test-endpoint", json={
        "llmType": "openai",
        "baseUrl": "https://api.example.com/v1",
        "model": "gpt-4o",
        "apiKey": "sk-test",
    })
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Empty or invalid response from model"}


def test_test_endpoint_failure_fallback_message(monkeypatch):
    _openai_stub(monkeypatch, error=ValueError(""))
    resp = client.post("/test-endpoint", json={
        "llmType": "openai",
        "baseUrl": "https://api.example.com/v1",
        "model": "gpt-4o",
    })
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Failed to test model"}
