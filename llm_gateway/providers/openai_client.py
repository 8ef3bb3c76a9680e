"""OpenAI（CloudAPI）后端适配器。

本模块负责：

1. 用 BackendConfig 构造 ChatOpenAI 客户端。
2. 以 [system, user] 两条消息直接调用模型，拿到完整的 AIMessage。
3. 提取文本内容，并按 usage 策略列表提取 token 统计。

直接调用而不是走 prompt 链，是因为只有 AIMessage 上才带 usage 信息。
"""

from typing import Any, List

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from llm_gateway.domain.exceptions import EmptyResponseError
from llm_gateway.domain.models import BackendConfig, ChatExchange, InvocationResult, ProviderKind
from llm_gateway.prompts import CHECK_SYSTEM_MESSAGE, CHECK_USER_MESSAGE
from llm_gateway.providers.usage import extract_token_usage


def message_text(content: Any) -> str:
    """把 AIMessage.content 统一转换为字符串（兼容 content block 列表）。"""

    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: List[str] = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text") or ""))
        return "".join(parts)
    return ""


class OpenAIBackend:
    """OpenAI 兼容云端 API 客户端实现。"""

    kind = ProviderKind.CLOUD_API

    def __init__(self, config: BackendConfig):
        self._config = config

    def _build_llm(self) -> ChatOpenAI:
        cfg = self._config
        return ChatOpenAI(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            temperature=cfg.temperature,
            max_retries=cfg.max_retries,
            top_p=cfg.top_p,
            frequency_penalty=cfg.frequency_penalty,
            presence_penalty=cfg.presence_penalty,
            max_tokens=cfg.max_tokens,
            streaming=cfg.streaming,
            stream_usage=cfg.stream_usage,
            timeout=cfg.timeout,
        )

    def invoke(self, exchange: ChatExchange) -> InvocationResult:
        llm = self._build_llm()
        messages: List[BaseMessage] = [
            SystemMessage(content=exchange.system_message),
            HumanMessage(content=exchange.user_message),
        ]
        ai_message = llm.invoke(messages)
        text = message_text(ai_message.content)
        if not text.strip():
            raise EmptyResponseError(provider=self.kind.value, model=self._config.model)
        return InvocationResult(response=text, token_usage=extract_token_usage(ai_message))

    def check(self) -> str:
        llm = self._build_llm()
        ai_message = llm.invoke([
            SystemMessage(content=CHECK_SYSTEM_MESSAGE),
            HumanMessage(content=CHECK_USER_MESSAGE),
        ])
        return message_text(ai_message.content).strip()
