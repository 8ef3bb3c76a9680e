"""Workflow node that forwards a chat request to the gateway's /llm-endpoint."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from llm_gateway.config.settings import settings
from llm_gateway.domain.exceptions import NetworkError, NodeInputError, ProviderError
from llm_gateway.flows.node import NodeBase, NodeCategory, NodeConfig, NodeInput, NodeOutput
from llm_gateway.infrastructure.logging.logger import logger

# Optional sampling fields copied verbatim into the request config when present.
SAMPLING_KEYS = (
    "temperature",
    "topP",
    "topK",
    "frequencyPenalty",
    "presencePenalty",
    "repeatPenalty",
    "maxTokens",
    "maxRetries",
)


class LLMNode(NodeBase):
    """Handles LLM requests and responses.

    The endpoint URL comes from ``config.params["endpoint_url"]`` when set,
    otherwise from ``settings.llm_endpoint_url``.
    """

    node_name = "llm"
    description = "Handles LLM requests and responses"
    version = "1.0.0"

    def __init__(self, config: NodeConfig, endpoint_url: Optional[str] = None):
        super().__init__(config)
        self.endpoint_url = endpoint_url or config.params.get("endpoint_url") or settings.llm_endpoint_url

    def get_default_category(self) -> NodeCategory:
        return NodeCategory.MIDDLE

    def _build_config(self, input: NodeInput) -> Dict[str, Any]:
        stream_usage = input.get("streamUsage")
        config: Dict[str, Any] = {
            "modelName": input.get("modelName"),
            "apiKey": input.get("apiKey"),
            "baseUrl": input.get("baseUrl"),
            "llmType": input.get("llmType") or "openai",
            "language": input.get("language") or "zh",
            "streaming": input.get("streaming") or False,
            "streamUsage": True if stream_usage is None else stream_usage,
        }
        for key in SAMPLING_KEYS:
            if input.get(key) is not None:
                config[key] = input[key]
        return {k: v for k, v in config.items() if v is not None}

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            with httpx.Client(timeout=settings.node_http_timeout, trust_env=False) as client:
                resp = client.post(self.endpoint_url, json=payload)
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), http_status=502) from e
        try:
            data = resp.json()
        except ValueError:
            raise ProviderError(
                message=f"Invalid response from LLM endpoint (HTTP {resp.status_code})",
                code="INVALID_ENVELOPE",
            )
        if not isinstance(data, dict):
            raise ProviderError(message="Invalid response from LLM endpoint", code="INVALID_ENVELOPE")
        return data

    def _call(self, input: NodeInput) -> NodeOutput:
        system_message = input.get("systemMessage")
        user_message = input.get("userMessage")
        if not system_message:
            raise NodeInputError("System message is required for LLMNode")
        if not user_message:
            raise NodeInputError("User message is required for LLMNode")

        config = self._build_config(input)
        data = self._post({
            "systemMessage": system_message,
            "userMessage": user_message,
            "config": config,
        })

        if not data.get("success"):
            error = data.get("error") or "LLM request failed"
            logger.error("llm_node.error", extra={"extra": {"id": self.config.id, "error": error}})
            raise ProviderError(message=error, code="LLM_REQUEST_FAILED")

        token_usage = data.get("tokenUsage")
        logger.info(
            "llm_node.response",
            extra={"extra": {"id": self.config.id, "usage": token_usage}},
        )
        output: NodeOutput = {
            "llmResponse": data.get("response"),
            "systemMessage": system_message,
            "userMessage": user_message,
            "modelName": input.get("modelName"),
            "llmType": config["llmType"],
        }
        if token_usage:
            output["tokenUsage"] = token_usage
        return output
