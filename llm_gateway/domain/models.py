"""统一的配置、对话与结果数据模型。

本模块定义了网关在两类 Provider 之间共享的标准数据结构：

- BackendConfig: 经过校验与补全默认值后的后端配置。
- ChatExchange: 一次调用的 system / user 消息对。
- InvocationResult: 从 Provider 解析后的统一响应结果。
- ResponseEnvelope: HTTP 层固定格式的 JSON 包装。

所有 Provider 适配器（OpenAIBackend、OllamaBackend）都只依赖这些模型。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Optional

from llm_gateway.domain.exceptions import ValidationError


Locale = Literal["zh", "en"]


class ProviderKind(str, Enum):
    """后端类型，值与请求体中的 llmType 一致。"""

    CLOUD_API = "openai"
    LOCAL_SERVER = "ollama"


@dataclass(frozen=True)
class BackendConfig:
    """校验后的后端配置。

    kind 决定哪些参数有意义：top_k / repeat_penalty 只作用于 LOCAL_SERVER，
    frequency_penalty / presence_penalty / stream_usage 主要作用于 CLOUD_API。
    timeout 为 None 表示不设超时。
    """

    kind: ProviderKind
    model: str
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: float = 0.7
    top_p: float = 0.7
    top_k: int = 40
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    repeat_penalty: float = 1.1
    max_tokens: Optional[int] = None
    max_retries: int = 0
    streaming: bool = False
    stream_usage: bool = True
    locale: Locale = "zh"
    timeout: Optional[float] = None


@dataclass(frozen=True)
class ChatExchange:
    """一次调用的消息对，构造后不可修改。"""

    system_message: str
    user_message: str

    def __post_init__(self) -> None:
        if not isinstance(self.system_message, str) or not self.system_message:
            raise ValidationError(code="MISSING_SYSTEM_MESSAGE", message="System message is required")
        if not isinstance(self.user_message, str) or not self.user_message:
            raise ValidationError(code="MISSING_USER_MESSAGE", message="User message is required")


@dataclass(frozen=True)
class TokenUsage:
    """Provider 返回的 token 统计信息（统一格式）。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class InvocationResult:
    """一次调用的最终结果；token_usage 缺失不算错误。"""

    response: str
    token_usage: Optional[TokenUsage] = None


@dataclass
class ResponseEnvelope:
    """HTTP 接口统一返回结构。

    success 为 True 时填 response（以及可选的 token_usage / message），
    否则只填 error。
    """

    success: bool
    response: Optional[str] = None
    token_usage: Optional[TokenUsage] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, result: InvocationResult) -> "ResponseEnvelope":
        return cls(success=True, response=result.response, token_usage=result.token_usage)

    @classmethod
    def fail(cls, error: str) -> "ResponseEnvelope":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success}
        if self.message is not None:
            payload["message"] = self.message
        if self.response is not None:
            payload["response"] = self.response
        if self.token_usage is not None:
            payload["tokenUsage"] = self.token_usage.to_dict()
        if self.error is not None:
            payload["error"] = self.error
        return payload
