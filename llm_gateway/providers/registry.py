"""Provider 名称与默认参数。

本模块把请求体里的 llmType 字符串映射为 ProviderKind，
并集中维护各采样参数的默认值，Normalizer 只在字段缺失时使用这些默认值。
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from llm_gateway.domain.models import ProviderKind


@dataclass(frozen=True)
class DefaultSettings:
    """字段缺失时使用的默认参数。"""

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
    locale: str = "zh"


DEFAULTS = DefaultSettings()

# 连通性测试使用更低的温度，输出更稳定
CHECK_TEMPERATURE = 0.1

SUPPORTED_LOCALES = ("zh", "en")


PROVIDER_REGISTRY: Mapping[str, ProviderKind] = {
    "openai": ProviderKind.CLOUD_API,
    "ollama": ProviderKind.LOCAL_SERVER,
}


def get_provider_kind(name: str) -> ProviderKind:
    """根据名称获取 ProviderKind，名称不区分大小写。"""

    key = name.strip().lower()
    for k, kind in PROVIDER_REGISTRY.items():
        if k == key:
            return kind
    raise KeyError(f"Unknown provider: {name!r}")
