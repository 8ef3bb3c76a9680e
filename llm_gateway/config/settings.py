"""配置管理模块。

支持从 .env、config.yaml 以及环境变量加载配置。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("LLM_GATEWAY_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
        Path(__file__).resolve().parents[1] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """网关配置（使用 Pydantic）。"""

    # ---- HTTP 服务 ----
    host: str = Field(default="127.0.0.1", description="HTTP 服务监听地址")
    port: int = Field(default=8000, ge=1, le=65535, description="HTTP 服务端口")

    # ---- 工作流节点 ----
    llm_endpoint_url: str = Field(
        default="http://127.0.0.1:8000/llm-endpoint",
        description="LLMNode 调用的网关地址",
    )
    node_http_timeout: Optional[float] = Field(
        default=None,
        description="LLMNode 请求网关的超时时间（秒），None 表示不限制",
    )

    # ---- Provider ----
    check_timeout: float = Field(default=30.0, ge=1.0, description="连通性测试超时时间（秒）")
    default_ollama_base_url: str = Field(
        default="http://localhost:11434",
        description="未配置 baseUrl 时 Ollama 使用的地址",
    )

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("llm_endpoint_url", "default_ollama_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("URL must not be empty")
        return v.rstrip("/")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
