"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 llmType 与默认参数 (registry)，校验原始配置 (normalizer)。
- 提供两类后端的具体实现 (openai_client、ollama_client) 与 usage 提取 (usage)。
"""

from llm_gateway.domain.exceptions import ValidationError
from llm_gateway.domain.models import BackendConfig, ProviderKind
from llm_gateway.providers.base import ChatBackend
from llm_gateway.providers.ollama_client import OllamaBackend
from llm_gateway.providers.openai_client import OpenAIBackend


def create_backend(config: BackendConfig) -> ChatBackend:
    """根据 config.kind 创建后端实例，这是唯一的分发点。"""

    if config.kind is ProviderKind.CLOUD_API:
        return OpenAIBackend(config)
    if config.kind is ProviderKind.LOCAL_SERVER:
        return OllamaBackend(config)
    raise ValidationError(code="UNSUPPORTED_PROVIDER", message=f"Unsupported LLM type: {config.kind!r}")
