from llm_gateway.domain.models import InvocationResult, ResponseEnvelope, TokenUsage


def test_envelope_success_without_usage():
    env = ResponseEnvelope.ok(InvocationResult(response="hi"))
    assert env.to_dict() == {"success": True, "response": "hi"}


def test_envelope_success_with_usage():
    env = ResponseEnvelope.ok(InvocationResult(response="hi", token_usage=TokenUsage(1, 2, 3)))
    assert env.to_dict()["tokenUsage"] == {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}


def test_envelope_failure_has_only_error():
    assert ResponseEnvelope.fail("boom").to_dict() == {"success": False, "error": "boom"}
