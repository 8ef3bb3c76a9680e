"""对外服务函数。

提供 HTTP 层调用的两个入口：

- invoke_llm: 完整对话调用，返回 InvocationResult。
- check_model: 连通性测试，只验证地址与凭证可用。
"""

from typing import Optional

from llm_gateway.domain.exceptions import BusinessError, EmptyResponseError, ProviderError
from llm_gateway.domain.models import BackendConfig, ChatExchange, InvocationResult, ProviderKind
from llm_gateway.infrastructure.logging.observer import InvocationObserver, resolve_observer
from llm_gateway.providers import create_backend


def invoke_llm(
    exchange: ChatExchange,
    config: BackendConfig,
    observer: Optional[InvocationObserver] = None,
) -> InvocationResult:
    """执行一次 LLM 调用。

    Args:
        exchange: system / user 消息对
        config: 经过 normalize_config 处理的后端配置
        observer: 调用观测钩子（可选，默认写日志）

    Returns:
        包含回复文本与可选 token usage 的 InvocationResult

    Raises:
        EmptyResponseError / InvalidResponseError: 模型没有返回可用文本
        ProviderError: 客户端构造或调用过程中的其他异常
    """
    obs = resolve_observer(observer)
    obs.on_start(config.kind, config.model)
    try:
        result = create_backend(config).invoke(exchange)
    except BusinessError as e:
        obs.on_failure(config.kind, config.model, e)
        raise
    except Exception as e:
        obs.on_failure(config.kind, config.model, e)
        raise ProviderError(message=str(e), provider=config.kind.value, model=config.model) from e

    if result.token_usage is None and config.kind is ProviderKind.CLOUD_API:
        obs.on_usage_missing(config.kind, config.model, config.streaming and config.stream_usage)
    obs.on_success(config.kind, config.model, result)
    return result


def check_model(config: BackendConfig, observer: Optional[InvocationObserver] = None) -> str:
    """发送测试消息，返回去除首尾空白后的回复文本。"""
    obs = resolve_observer(observer)
    obs.on_start(config.kind, config.model)
    try:
        content = create_backend(config).check()
    except BusinessError as e:
        obs.on_failure(config.kind, config.model, e)
        raise
    except Exception as e:
        obs.on_failure(config.kind, config.model, e)
        raise ProviderError(message=str(e), provider=config.kind.value, model=config.model) from e

    if not content:
        error = EmptyResponseError(provider=config.kind.value, model=config.model)
        obs.on_failure(config.kind, config.model, error)
        raise error
    obs.on_success(config.kind, config.model, InvocationResult(response=content))
    return content
