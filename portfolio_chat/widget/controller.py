"""与具体 UI 框架无关的聊天弹窗控制器。

它扮演 "UI 协作者" 的角色：持有打开/关闭状态与输入框缓冲区，
把提交转交给 RequestCoordinator，并把 store / coordinator 的变化
统一通知给负责绘制的前端（tkinter、终端或测试）。
"""

import asyncio
from typing import Callable, List, Optional, Tuple

from portfolio_chat.agents.coordinator import RequestCoordinator
from portfolio_chat.domain.conversation import ConversationStore
from portfolio_chat.infrastructure.logging.logger import logger


SEND_LABEL = "Send"
SENDING_LABEL = "…"

RedrawListener = Callable[[], None]


class ChatWidget:
    """聊天弹窗的状态与交互逻辑。"""

    def __init__(
        self,
        store: ConversationStore,
        coordinator: RequestCoordinator,
        welcome_message: str,
    ):
        self._store = store
        self._coordinator = coordinator
        self._welcome_message = welcome_message
        self.is_open = False
        self.input_text = ""
        self._listeners: List[RedrawListener] = []
        store.subscribe(lambda _store: self._notify())
        coordinator.subscribe(lambda _status: self._notify())

    @property
    def is_sending(self) -> bool:
        return self._coordinator.is_busy

    @property
    def input_enabled(self) -> bool:
        return not self.is_sending

    @property
    def submit_label(self) -> str:
        return SENDING_LABEL if self.is_sending else SEND_LABEL

    def set_input(self, text: str) -> None:
        self.input_text = text

    def toggle(self) -> bool:
        """切换弹窗；首次打开且没有可见消息时追加问候语。返回新的打开状态。"""
        opening = not self.is_open
        self.is_open = opening
        if opening and not self._store.visible():
            self._store.seed_welcome(self._welcome_message)
        else:
            self._notify()
        return self.is_open

    def submit(self) -> Optional[asyncio.Task]:
        task = self._coordinator.submit(self.input_text)
        if task is not None:
            self.input_text = ""
            self._notify()
        return task

    def messages(self) -> List[Tuple[str, str]]:
        """可见消息，kind 为 "user" 或 "bot"。"""
        return [
            ("user" if t.role == "user" else "bot", t.content)
            for t in self._store.visible()
        ]

    def subscribe(self, listener: RedrawListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.exception("Redraw listener failed", extra={"extra": {"error": repr(e)}})
