"""配置管理模块。

支持从 .env、config.yaml 以及环境变量（前缀 CHAT_）加载配置。
优先级：显式参数 > 环境变量 > .env > config.yaml。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from portfolio_chat.domain.models import (
    DEFAULT_CONNECTION_ERROR_MESSAGE,
    DEFAULT_FALLBACK_MESSAGE,
    DEFAULT_HISTORY_WINDOW,
    DEFAULT_WELCOME_MESSAGE,
    DEFAULT_WORKER_URL,
)
from portfolio_chat.prompts import load_system_prompt


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("CHAT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
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
    """聊天组件配置（使用 Pydantic）。"""

    # ---- Worker ----
    worker_url: str = Field(
        default=DEFAULT_WORKER_URL,
        description="后端代理（如 Cloudflare Worker）的 POST 地址",
    )
    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")
    history_window: int = Field(
        default=DEFAULT_HISTORY_WINDOW,
        ge=1,
        le=200,
        description="出站请求最多携带的消息条数（含 system）",
    )

    # ---- 文案 ----
    system_prompt: str = Field(
        default_factory=load_system_prompt,
        description="发给 worker 的隐藏系统提示词",
    )
    welcome_message: str = Field(default=DEFAULT_WELCOME_MESSAGE, description="首次打开时的问候语")
    fallback_message: str = Field(
        default=DEFAULT_FALLBACK_MESSAGE,
        description="worker 有响应但没有可用 reply 时展示的文案",
    )
    connection_error_message: str = Field(
        default=DEFAULT_CONNECTION_ERROR_MESSAGE,
        description="连不上 worker 时展示的文案",
    )

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_prefix="CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("worker_url")
    @classmethod
    def strip_worker_url(cls, v: str) -> str:
        return v.strip()

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
