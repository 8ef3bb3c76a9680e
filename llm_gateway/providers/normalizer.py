"""后端配置校验与补全。

把请求体中的原始配置（camelCase 字段）转换为 BackendConfig：

1. 解析 llmType，未知类型抛 ValidationError。
2. 校验模型名非空。
3. 仅在字段缺失时补全默认参数。
4. 对 Ollama 的 baseUrl 做一次规范化；OpenAI 的 baseUrl 只做 trim。
"""

from typing import Any, Mapping, Optional

from llm_gateway.config.settings import settings
from llm_gateway.domain.exceptions import ValidationError
from llm_gateway.domain.models import BackendConfig, ProviderKind
from llm_gateway.infrastructure.logging.logger import logger
from llm_gateway.providers.registry import (
    CHECK_TEMPERATURE,
    DEFAULTS,
    SUPPORTED_LOCALES,
    get_provider_kind,
)


LOCAL_DEFAULT_HOST = "localhost:11434"
LOCAL_DEFAULT_PORT = "11434"


def normalize_local_base_url(url: str) -> str:
    """规范化本地模型服务地址。

    规则按顺序只命中一条（互斥），最后去掉一个末尾斜杠：
    - "localhost:11434" / "11434" -> "http://localhost:11434"
    - "localhost:<port>" -> "http://localhost:<port>"
    - 没有 http:// 或 https:// 前缀 -> 补 "http://"
    """

    if url in (LOCAL_DEFAULT_HOST, LOCAL_DEFAULT_PORT):
        url = f"http://{LOCAL_DEFAULT_HOST}"
    elif url.startswith("localhost:") and not url.startswith("http://"):
        url = "http://" + url
    elif not url.startswith("http://") and not url.startswith("https://"):
        url = "http://" + url

    if url.endswith("/"):
        url = url[:-1]
    return url


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def _as_float(raw: Mapping[str, Any], key: str, default: float) -> float:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(code="INVALID_PARAMETER", message=f"{key} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(code="INVALID_PARAMETER", message=f"{key} must be a number")


def _as_int(raw: Mapping[str, Any], key: str, default: Optional[int]) -> Optional[int]:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(code="INVALID_PARAMETER", message=f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(code="INVALID_PARAMETER", message=f"{key} must be an integer")


def _as_bool(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes"}


def _resolve_kind(raw: Mapping[str, Any]) -> ProviderKind:
    llm_type = raw.get("llmType") or ProviderKind.CLOUD_API.value
    if not isinstance(llm_type, str):
        raise ValidationError(code="UNSUPPORTED_PROVIDER", message=f"Unsupported LLM type: {llm_type!r}")
    try:
        return get_provider_kind(llm_type)
    except KeyError:
        raise ValidationError(code="UNSUPPORTED_PROVIDER", message=f"Unsupported LLM type: {llm_type}")


def _resolve_locale(raw: Mapping[str, Any]) -> str:
    locale = raw.get("language")
    if locale is None:
        return DEFAULTS.locale
    if locale not in SUPPORTED_LOCALES:
        logger.warning("normalizer.unsupported_locale", extra={"extra": {"language": locale}})
        return DEFAULTS.locale
    return locale


def _resolve_base_url(kind: ProviderKind, raw: Mapping[str, Any]) -> Optional[str]:
    base_url = raw.get("baseUrl")
    base_url = base_url.strip() if isinstance(base_url, str) else ""
    if kind is ProviderKind.LOCAL_SERVER:
        if not base_url:
            return settings.default_ollama_base_url
        return normalize_local_base_url(base_url)
    return base_url or None


def normalize_config(raw: Mapping[str, Any], *, timeout: Optional[float] = None) -> BackendConfig:
    """校验原始配置并补全默认值，返回 BackendConfig。

    Raises:
        ValidationError: 模型名为空、llmType 不受支持或数值参数非法。
    """

    if not isinstance(raw, Mapping):
        raise ValidationError(code="INVALID_CONFIG", message="Config must be an object")

    kind = _resolve_kind(raw)
    model = _pick(raw, "modelName", "model")
    model = model.strip() if isinstance(model, str) else ""
    if not model:
        raise ValidationError(code="MISSING_MODEL", message="Model name is required")

    api_key = raw.get("apiKey")
    api_key = api_key.strip() if isinstance(api_key, str) else ""
    return BackendConfig(
        kind=kind,
        model=model,
        base_url=_resolve_base_url(kind, raw),
        api_key=api_key or None,
        temperature=_as_float(raw, "temperature", DEFAULTS.temperature),
        top_p=_as_float(raw, "topP", DEFAULTS.top_p),
        top_k=_as_int(raw, "topK", DEFAULTS.top_k),
        frequency_penalty=_as_float(raw, "frequencyPenalty", DEFAULTS.frequency_penalty),
        presence_penalty=_as_float(raw, "presencePenalty", DEFAULTS.presence_penalty),
        repeat_penalty=_as_float(raw, "repeatPenalty", DEFAULTS.repeat_penalty),
        max_tokens=_as_int(raw, "maxTokens", DEFAULTS.max_tokens),
        max_retries=_as_int(raw, "maxRetries", DEFAULTS.max_retries),
        streaming=_as_bool(raw, "streaming", DEFAULTS.streaming),
        stream_usage=_as_bool(raw, "streamUsage", DEFAULTS.stream_usage),
        locale=_resolve_locale(raw),
        timeout=timeout,
    )


def normalize_check_config(raw: Mapping[str, Any]) -> BackendConfig:
    """连通性测试专用配置：低温度、固定超时。"""

    check_raw = dict(raw) if isinstance(raw, Mapping) else raw
    if isinstance(check_raw, dict):
        check_raw["temperature"] = CHECK_TEMPERATURE
    return normalize_config(check_raw, timeout=settings.check_timeout)
