import pytest
from langchain_core.messages import AIMessage

from llm_gateway.api.service import check_model, invoke_llm
from llm_gateway.domain.exceptions import EmptyResponseError, ProviderError, ValidationError
from llm_gateway.domain.models import ChatExchange
from llm_gateway.infrastructure.logging.observer import InvocationObserver
from llm_gateway.providers.normalizer import normalize_config


class RecordingObserver(InvocationObserver):
    def __init__(self):
        self.events = []

    def on_start(self, kind, model):
        self.events.append(("start", kind.value, model))

    def on_success(self, kind, model, result):
        self.events.append(("success", kind.value, model))

    def on_usage_missing(self, kind, model, streaming):
        self.events.append(("usage_missing", kind.value, streaming))

    def on_failure(self, kind, model, error):
        self.events.append(("failure", kind.value, str(error)))


def _openai_stub(monkeypatch, reply=None, error=None):
    class Stub:
        def __init__(self, **kwargs):
            pass

        def invoke(self, messages):
            if error is not None:
                raise error
            return reply

    monkeypatch.setattr("llm_gateway.providers.openai_client.ChatOpenAI", Stub)


def test_invoke_llm_reports_usage(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(
        content="ok",
        usage_metadata={"input_tokens": 10, "output_tokens": 5, "total_tokens": 15},
    ))
    obs = RecordingObserver()
    cfg = normalize_config({"llmType": "openai", "modelName": "gpt-4o"})
    result = invoke_llm(ChatExchange("s", "u"), cfg, observer=obs)

    assert result.token_usage.to_dict() == {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}
    assert obs.events == [("start", "openai", "gpt-4o"), ("success", "openai", "gpt-4o")]


def test_invoke_llm_usage_missing_under_streaming(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(content="ok"))
    obs = RecordingObserver()
    cfg = normalize_config({"llmType": "openai", "modelName": "gpt-4o", "streaming": True})
    result = invoke_llm(ChatExchange("s", "u"), cfg, observer=obs)

    assert result.token_usage is None
    assert ("usage_missing", "openai", True) in obs.events


def test_invoke_llm_tolerates_malformed_usage(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(content="real answer", response_metadata={"usage": {"prompt_tokens": "n/a"}}))
    obs = RecordingObserver()
    cfg = normalize_config({"llmType": "openai", "modelName": "gpt-4o"})
    result = invoke_llm(ChatExchange("s", "u"), cfg, observer=obs)

    assert result.response == "real answer"
    assert result.token_usage is None
    assert ("usage_missing", "openai", False) in obs.events


def test_invoke_llm_wraps_provider_error(monkeypatch):
    _openai_stub(monkeypatch, error=RuntimeError("invalid api key"))
    obs = RecordingObserver()
    cfg = normalize_config({"llmType": "openai", "modelName": "gpt-4o"})
    with pytest.raises(ProviderError) as exc:
        invoke_llm(ChatExchange("s", "u"), cfg, observer=obs)

    assert exc.value.message == "invalid api key"
    assert exc.value.http_status == 500
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert obs.events[-1] == ("failure", "openai", "invalid api key")


def test_invoke_llm_empty_response(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(content=""))
    cfg = normalize_config({"llmType": "openai", "modelName": "gpt-4o"})
    with pytest.raises(EmptyResponseError):
        invoke_llm(ChatExchange("s", "u"), cfg, observer=RecordingObserver())


def test_check_model_empty_response(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(content="   "))
    cfg = normalize_config({"llmType": "openai", "modelName": "gpt-4o"})
    with pytest.raises(EmptyResponseError) as exc:
        check_model(cfg, observer=RecordingObserver())
    assert exc.value.message == "Empty or invalid response from model"


def test_check_model_success(monkeypatch):
    _openai_stub(monkeypatch, AIMessage(content=" Test successful "))
    cfg = normalize_config({"llmType": "openai", "modelName": "gpt-4o"})
    assert check_model(cfg, observer=RecordingObserver()) == "Test successful"


def test_chat_exchange_requires_messages():
    with pytest.raises(ValidationError):
        ChatExchange("", "u")
    with pytest.raises(ValidationError):
        ChatExchange("s", "")
