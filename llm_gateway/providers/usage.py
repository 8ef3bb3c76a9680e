"""Token usage 提取策略。

不同版本的 ChatOpenAI 会把 token 统计放在不同位置，按优先级依次尝试：

1. message.usage_metadata（input_tokens / output_tokens / total_tokens），最新且最准确。
2. message.response_metadata["token_usage"]（旧版格式，兼容 "tokenUsage"）。
3. message.response_metadata["usage"]。

第一个返回非 None 的策略胜出；全部为 None 时不视为错误。
"""

from typing import Any, Callable, Mapping, Optional, Tuple

from langchain_core.messages import BaseMessage

from llm_gateway.domain.models import TokenUsage


UsageStrategy = Callable[[BaseMessage], Optional[TokenUsage]]


def _count(raw: Mapping[str, Any], *keys: str) -> int:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return int(value)
    return 0


def _from_counts(raw: Any) -> Optional[TokenUsage]:
    if not isinstance(raw, Mapping) or not raw:
        return None
    try:
        prompt = _count(raw, "prompt_tokens", "promptTokens", "input_tokens")
        completion = _count(raw, "completion_tokens", "completionTokens", "output_tokens")
        total = _count(raw, "total_tokens", "totalTokens") or prompt + completion
    except (TypeError, ValueError):
        # 非数字计数视为无用量信息
        return None
    return TokenUsage(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)


def from_usage_metadata(message: BaseMessage) -> Optional[TokenUsage]:
    metadata = getattr(message, "usage_metadata", None)
    if not metadata:
        return None
    try:
        return TokenUsage(
            prompt_tokens=int(metadata.get("input_tokens", 0)),
            completion_tokens=int(metadata.get("output_tokens", 0)),
            total_tokens=int(metadata.get("total_tokens", 0)),
        )
    except (TypeError, ValueError):
        return None


def from_token_usage(message: BaseMessage) -> Optional[TokenUsage]:
    metadata = getattr(message, "response_metadata", None) or {}
    return _from_counts(metadata.get("token_usage") or metadata.get("tokenUsage"))


def from_usage(message: BaseMessage) -> Optional[TokenUsage]:
    metadata = getattr(message, "response_metadata", None) or {}
    return _from_counts(metadata.get("usage"))


USAGE_STRATEGIES: Tuple[UsageStrategy, ...] = (
    from_usage_metadata,
    from_token_usage,
    from_usage,
)


def extract_token_usage(
    message: BaseMessage,
    strategies: Tuple[UsageStrategy, ...] = USAGE_STRATEGIES,
) -> Optional[TokenUsage]:
    for strategy in strategies:
        usage = strategy(message)
        if usage is not None:
            return usage
    return None
