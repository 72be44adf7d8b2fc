"""聊天组件共享的数据模型。

- ChatTurn: 一条对话消息（system/user/assistant）。
- RequestStatus: RequestCoordinator 的两种状态。
- ChatConfig: 一次会话使用的配置记录，构造时显式传入各组件。

这些结构不依赖 httpx 或 UI，Worker 客户端与前端都只和它们打交道。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal


# 与 OpenAI 风格 messages 数组里的 role 字段一致
Role = Literal["system", "user", "assistant"]

DEFAULT_WORKER_URL = "https://test/chat"
DEFAULT_HISTORY_WINDOW = 25
DEFAULT_WELCOME_MESSAGE = (
    "Hi! I can help you understand Saad Pasta’s projects, skills and experience."
)
DEFAULT_FALLBACK_MESSAGE = (
    "I am having trouble responding right now. Please try again in a moment."
)
DEFAULT_CONNECTION_ERROR_MESSAGE = (
    "Connection error. Please check your network and try again."
)


@dataclass(frozen=True)
class ChatTurn:
    """一条对话消息。

    - role: 消息角色。
    - content: 原始文本（Markdown 由前端自行渲染，这里不做处理）。
    """

    role: Role
    content: str

    def to_payload(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


class RequestStatus(str, Enum):
    """出站请求的状态：同一时刻最多一个请求在途。"""

    IDLE = "idle"
    BUSY = "busy"


@dataclass(frozen=True)
class ChatConfig:
    """会话级配置记录，创建后在整个会话内不可变。

    - worker_url: 代理/worker 的 POST 地址。
    - system_prompt: 隐藏的 system 消息内容。
    - welcome_message: 首次打开窗口时的问候语。
    - fallback_message: worker 有响应但没有可用 reply 时的回复。
    - connection_error_message: 完全连不上 worker 时的回复。
    - history_window: 出站 payload 最多携带的消息条数。
    - http_timeout: HTTP 超时时间（秒）。
    """

    worker_url: str = DEFAULT_WORKER_URL
    system_prompt: str = ""
    welcome_message: str = DEFAULT_WELCOME_MESSAGE
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE
    connection_error_message: str = DEFAULT_CONNECTION_ERROR_MESSAGE
    history_window: int = DEFAULT_HISTORY_WINDOW
    http_timeout: float = 30.0

    @classmethod
    def from_settings(cls, cfg: Any) -> "ChatConfig":
        """从 Settings（或任何带同名属性的对象）构造配置记录。"""

        return cls(
            worker_url=cfg.worker_url,
            system_prompt=cfg.system_prompt,
            welcome_message=getattr(cfg, "welcome_message", DEFAULT_WELCOME_MESSAGE),
            fallback_message=getattr(cfg, "fallback_message", DEFAULT_FALLBACK_MESSAGE),
            connection_error_message=getattr(
                cfg, "connection_error_message", DEFAULT_CONNECTION_ERROR_MESSAGE
            ),
            history_window=getattr(cfg, "history_window", DEFAULT_HISTORY_WINDOW),
            http_timeout=getattr(cfg, "http_timeout", 30.0),
        )
