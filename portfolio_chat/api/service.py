"""对外 API 服务模块。

提供组装一次组件会话的工厂函数，供前端（tkinter 弹窗、测试等）调用。
"""

from dataclasses import dataclass
from typing import Optional

from portfolio_chat.agents.coordinator import RequestCoordinator
from portfolio_chat.config.settings import settings
from portfolio_chat.domain.conversation import ConversationStore
from portfolio_chat.domain.models import ChatConfig
from portfolio_chat.infrastructure.logging.logger import logger
from portfolio_chat.providers import create_worker_client
from portfolio_chat.providers.base import WorkerClient
from portfolio_chat.widget.controller import ChatWidget


@dataclass
class ChatSession:
    """一次组件会话（一次 UI 挂载）所需的全部对象。"""

    config: ChatConfig
    store: ConversationStore
    client: WorkerClient
    coordinator: RequestCoordinator
    widget: ChatWidget


def create_session(
    config: Optional[ChatConfig] = None,
    client: Optional[WorkerClient] = None,
) -> ChatSession:
    """创建新的聊天会话。

    Args:
        config: 配置记录（可选，不提供则从全局 settings 构造）
        client: worker 客户端（可选，默认使用 HttpWorkerClient）

    Returns:
        组装好的 ChatSession
    """
    cfg = config or ChatConfig.from_settings(settings)
    store = ConversationStore.initialize(cfg.system_prompt)
    worker = client or create_worker_client(cfg)
    coordinator = RequestCoordinator(store=store, client=worker, config=cfg)
    widget = ChatWidget(store=store, coordinator=coordinator, welcome_message=cfg.welcome_message)
    logger.info(
        "Created chat session",
        extra={"extra": {
            "worker_url": cfg.worker_url,
            "history_window": cfg.history_window,
            "client": getattr(worker, "name", type(worker).__name__),
        }},
    )
    return ChatSession(config=cfg, store=store, client=worker, coordinator=coordinator, widget=widget)
