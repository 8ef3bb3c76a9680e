"""调用观测钩子。

LLM 调用在几个固定位置通知观察者：开始、成功、token usage 缺失、失败。
默认实现把这些事件写入结构化日志；测试或上层应用可以注入自己的观察者。
"""

from __future__ import annotations

from typing import Optional

from llm_gateway.domain.models import InvocationResult, ProviderKind
from llm_gateway.infrastructure.logging.logger import logger


class InvocationObserver:
    """空实现的观察者基类，子类按需覆盖。"""

    def on_start(self, kind: ProviderKind, model: str) -> None:
        pass

    def on_success(self, kind: ProviderKind, model: str, result: InvocationResult) -> None:
        pass

    def on_usage_missing(self, kind: ProviderKind, model: str, streaming: bool) -> None:
        pass

    def on_failure(self, kind: ProviderKind, model: str, error: Exception) -> None:
        pass


class LoggingObserver(InvocationObserver):
    """把调用事件写入 llm_gateway 日志。"""

    def on_start(self, kind: ProviderKind, model: str) -> None:
        logger.info("invoke.start", extra={"extra": {"provider": kind.value, "model": model}})

    def on_success(self, kind: ProviderKind, model: str, result: InvocationResult) -> None:
        usage = result.token_usage.to_dict() if result.token_usage else None
        logger.info(
            "invoke.success",
            extra={"extra": {"provider": kind.value, "model": model, "usage": usage}},
        )

    def on_usage_missing(self, kind: ProviderKind, model: str, streaming: bool) -> None:
        # 流式模式下响应里通常没有 usage，属于正常情况
        logger.info(
            "invoke.usage_missing",
            extra={"extra": {"provider": kind.value, "model": model, "streaming": streaming}},
        )

    def on_failure(self, kind: ProviderKind, model: str, error: Exception) -> None:
        logger.error(
            "invoke.failure",
            extra={"extra": {"provider": kind.value, "model": model, "error": str(error)}},
        )


default_observer = LoggingObserver()


def resolve_observer(observer: Optional[InvocationObserver]) -> InvocationObserver:
    return observer if observer is not None else default_observer
