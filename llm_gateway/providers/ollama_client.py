"""Ollama（LocalServer）后端适配器。

调用链为 DIALOGUE_PROMPT | ChatOllama | StrOutputParser，
该路径拿不到结构化 usage，因此 token_usage 始终为 None。
"""

from typing import Any, Dict

from langchain_core.messages import HumanMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_ollama import ChatOllama

from llm_gateway.domain.exceptions import EmptyResponseError, InvalidResponseError
from llm_gateway.domain.models import BackendConfig, ChatExchange, InvocationResult, ProviderKind
from llm_gateway.prompts import DIALOGUE_PROMPT, LOCAL_CHECK_MESSAGE
from llm_gateway.providers.openai_client import message_text


class OllamaBackend:
    """本地 Ollama 服务客户端实现。"""

    kind = ProviderKind.LOCAL_SERVER

    def __init__(self, config: BackendConfig):
        self._config = config

    def _build_llm(self) -> ChatOllama:
        cfg = self._config
        kwargs: Dict[str, Any] = {
            "model": cfg.model,
            "base_url": cfg.base_url,
            "temperature": cfg.temperature,
            "top_k": cfg.top_k,
            "top_p": cfg.top_p,
            "repeat_penalty": cfg.repeat_penalty,
            "client_kwargs": {"timeout": cfg.timeout},
        }
        if cfg.max_tokens is not None:
            kwargs["num_predict"] = cfg.max_tokens
        return ChatOllama(**kwargs)

    def invoke(self, exchange: ChatExchange) -> InvocationResult:
        chain = DIALOGUE_PROMPT | self._build_llm() | StrOutputParser()
        output = chain.invoke({
            "system_message": exchange.system_message,
            "user_message": exchange.user_message,
        })
        if not isinstance(output, str):
            raise InvalidResponseError(provider=self.kind.value, model=self._config.model)
        if not output.strip():
            raise EmptyResponseError(provider=self.kind.value, model=self._config.model)
        return InvocationResult(response=output)

    def check(self) -> str:
        ai_message = self._build_llm().invoke([HumanMessage(content=LOCAL_CHECK_MESSAGE)])
        return message_text(ai_message.content).strip()
