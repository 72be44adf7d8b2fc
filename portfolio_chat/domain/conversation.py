from typing import Callable, List

from portfolio_chat.infrastructure.logging.logger import logger

from .models import ChatTurn


StoreListener = Callable[["ConversationStore"], None]


class ConversationStore:
    """单个组件会话的内存消息序列。

    序列只追加、不删除、不原地修改；第一条永远是隐藏的 system 消息。
    没有清空或重置的入口，新会话请新建实例。会话结束即丢弃，不做持久化。
    """

    def __init__(self, system_prompt: str):
        self._turns: List[ChatTurn] = [ChatTurn(role="system", content=system_prompt)]
        self._listeners: List[StoreListener] = []

    @classmethod
    def initialize(cls, system_prompt: str) -> "ConversationStore":
        """创建只包含 system 消息的新会话。"""
        return cls(system_prompt)

    @property
    def turns(self) -> List[ChatTurn]:
        return list(self._turns)

    @property
    def system_turn(self) -> ChatTurn:
        return self._turns[0]

    def append_user(self, text: str) -> List[ChatTurn]:
        """追加一条 user 消息。调用方负责保证 text 去空白后非空。"""
        return self._append(ChatTurn(role="user", content=text))

    def append_assistant(self, text: str) -> List[ChatTurn]:
        return self._append(ChatTurn(role="assistant", content=text))

    def visible(self) -> List[ChatTurn]:
        """需要展示给访客的消息（过滤掉 system），每次现算，不缓存。"""
        return [t for t in self._turns if t.role != "system"]

    def seed_welcome(self, greeting: str) -> bool:
        """仅当没有可见消息时追加问候语，返回是否追加。"""
        if self.visible():
            return False
        self.append_assistant(greeting)
        return True

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """注册变更回调，返回取消订阅函数。"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _append(self, turn: ChatTurn) -> List[ChatTurn]:
        self._turns.append(turn)
        self._notify()
        return self.turns

    def _notify(self) -> None:
        # 回调失败只记日志，不影响序列本身
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.exception(
                    "Store listener failed",
                    extra={"extra": {"listener": repr(listener), "error": repr(e)}},
                )
