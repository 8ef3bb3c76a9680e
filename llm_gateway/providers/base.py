"""Provider 抽象接口。

上层 service 不直接依赖具体的 LangChain 客户端，而是依赖此协议：

- 每类后端实现一个 ChatBackend（OpenAIBackend、OllamaBackend）。
- 负责：用 BackendConfig 构造客户端，执行一次调用，并把结果解析为 InvocationResult。
"""

from typing import Protocol

from llm_gateway.domain.models import ChatExchange, InvocationResult, ProviderKind


class ChatBackend(Protocol):
    """LLM 后端客户端协议。

    实现者需要提供：
    - kind: 后端类型，用于日志/观测。
    - invoke(exchange): 执行一次完整对话调用，返回统一的 InvocationResult。
    - check(): 发送最简单的测试消息，返回原始文本，用于连通性检查。
    """

    kind: ProviderKind

    def invoke(self, exchange: ChatExchange) -> InvocationResult:
        ...

    def check(self) -> str:
        ...
