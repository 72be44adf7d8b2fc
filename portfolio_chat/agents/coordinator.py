"""出站请求协调器。

负责单飞（single-flight）请求的完整生命周期：追加用户消息、裁剪历史、
调用 worker、把结果归一成恰好一条助手消息，并维护 idle/busy 状态。
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from portfolio_chat.domain.conversation import ConversationStore
from portfolio_chat.domain.exceptions import ApiError, NetworkError
from portfolio_chat.domain.models import ChatConfig, RequestStatus
from portfolio_chat.infrastructure.logging.logger import logger
from portfolio_chat.providers.base import WorkerClient


StatusListener = Callable[[RequestStatus], None]


class RequestCoordinator:
    def __init__(
        self,
        store: ConversationStore,
        client: WorkerClient,
        config: ChatConfig,
    ):
        self._store = store
        self._client = client
        self._config = config
        self._status = RequestStatus.IDLE
        self._pending: Optional[asyncio.Task] = None
        self._listeners: List[StatusListener] = []

    @property
    def status(self) -> RequestStatus:
        return self._status

    @property
    def is_busy(self) -> bool:
        return self._status is RequestStatus.BUSY

    @property
    def pending(self) -> Optional[asyncio.Task]:
        """当前在途的请求任务；空闲时为 None。"""
        return self._pending

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def submit(self, text: str) -> Optional[asyncio.Task]:
        """提交一条用户输入。

        必须在运行中的事件循环里调用。文本去空白后为空、或已有请求在途时
        直接忽略并返回 None（不排队、不取消）；否则追加用户消息、进入 busy，
        并返回负责本次请求的任务。返回任务即表示调用方可以清空输入框。
        """
        trimmed = (text or "").strip()
        if not trimmed or self.is_busy:
            return None

        loop = asyncio.get_running_loop()
        self._store.append_user(trimmed)
        self._status = RequestStatus.BUSY
        payload = self.build_payload()
        self._log_truncation(len(self._store.turns), len(payload))
        # 任务创建后才通知监听者
        self._pending = loop.create_task(self._run(payload))
        self._notify_status()
        return self._pending

    async def wait_idle(self) -> None:
        """等待在途请求结束（没有请求时立即返回）。"""
        if self._pending is not None:
            await asyncio.shield(self._pending)

    def build_payload(self) -> List[Dict[str, Any]]:
        """取完整序列（含 system）的最后 history_window 条作为出站 payload。

        只裁剪发送内容，存储中的历史保持完整。无副作用。
        """
        window = max(1, self._config.history_window)
        return [t.to_payload() for t in self._store.turns[-window:]]

    def _log_truncation(self, total: int, sent: int) -> None:
        # 窗口外的 system 消息不会补回，只记录下来
        if total <= sent:
            return
        logger.info(
            "Truncated outbound history",
            extra={"extra": {
                "history_window": self._config.history_window,
                "trimmed": total - sent,
                "system_turn_dropped": True,
            }},
        )

    async def _run(self, payload: List[Dict[str, Any]]) -> None:
        start_time = time.time()
        log_ctx: Dict[str, Any] = {
            "trace_id": f"tr-{uuid4().hex}",
            "client": getattr(self._client, "name", type(self._client).__name__),
        }
        try:
            self._log(logging.INFO, "Calling worker", log_ctx, message_count=len(payload))
            final_text = await self._exchange(payload, log_ctx)
            self._store.append_assistant(final_text)
        finally:
            self._pending = None
            self._set_status(RequestStatus.IDLE)
            self._log(
                logging.INFO,
                "Request settled",
                log_ctx,
                elapsed_seconds=round(time.time() - start_time, 2),
            )

    async def _exchange(self, payload: List[Dict[str, Any]], log_ctx: Dict[str, Any]) -> str:
        """调用 worker 并把结果归一成要展示的文本。"""
        try:
            reply = await self._client.send(payload)
        except ApiError as e:
            # worker 可达但返回了非 2xx
            self._log(
                logging.ERROR,
                "[chat-worker] HTTP error",
                log_ctx,
                status=e.http_status,
                body=e.message,
            )
            return self._config.fallback_message
        except NetworkError as e:
            self._log(logging.ERROR, "[chat-worker] fetch failed", log_ctx, code=e.code, error=e.message)
            return self._config.connection_error_message
        except Exception as e:
            logger.exception(
                "[chat-worker] fetch failed",
                extra={"extra": {**log_ctx, "error": repr(e)}},
            )
            return self._config.connection_error_message

        if reply is None:
            self._log(logging.WARNING, "Worker reply unusable, using fallback", log_ctx)
            return self._config.fallback_message
        return reply

    def _set_status(self, status: RequestStatus) -> None:
        if status is self._status:
            return
        self._status = status
        self._notify_status()

    def _notify_status(self) -> None:
        # 回调失败只记日志，状态迁移照常完成
        for listener in list(self._listeners):
            try:
                listener(self._status)
            except Exception as e:
                logger.exception(
                    "Status listener failed",
                    extra={"extra": {"status": self._status.value, "error": repr(e)}},
                )

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
