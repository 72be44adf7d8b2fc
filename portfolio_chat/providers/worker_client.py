"""作品集聊天 worker 的 HTTP 适配器。

线上协议非常简单：
- URL: 配置中的 worker_url，方法 POST
- 请求体: {"messages": [{"role": ..., "content": ...}, ...]}
- 响应体: {"reply": "<助手回复>"}

本实现只负责传输与解析，不决定展示给访客的文案。
"""

import json
from typing import Any, Dict, List, Optional

import httpx

from portfolio_chat.domain.exceptions import ApiError, NetworkError
from portfolio_chat.domain.models import ChatConfig
from portfolio_chat.infrastructure.logging.logger import logger


class HttpWorkerClient:
    """基于 httpx.AsyncClient 的 worker 客户端实现。"""

    name = "http-worker"

    def __init__(self, config: ChatConfig):
        self._config = config

    async def send(self, messages: List[Dict[str, Any]]) -> Optional[str]:
        try:
            async with httpx.AsyncClient(timeout=self._config.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    self._config.worker_url,
                    json={"messages": messages},
                    headers={"Content-Type": "application/json"},
                )
        except httpx.RequestError as e:
            raise NetworkError(
                code="NETWORK_ERROR",
                message=str(e) or type(e).__name__,
                endpoint=self._config.worker_url,
            )
        if not 200 <= resp.status_code < 300:
            raise ApiError(
                code="API_ERROR",
                message=resp.text,
                http_status=resp.status_code,
                endpoint=self._config.worker_url,
            )
        try:
            data = resp.json()
        except ValueError:
            logger.warning(
                "[chat-worker] response is not JSON",
                extra={"extra": {"status": resp.status_code}},
            )
            return None
        logger.info(f"[chat-worker] response json: {json.dumps(data, ensure_ascii=False)}")
        return self.parse_reply(data)

    @staticmethod
    def parse_reply(data: Any) -> Optional[str]:
        """取出非空字符串 reply，其他形状一律返回 None。"""

        if not isinstance(data, dict):
            return None
        reply = data.get("reply")
        if isinstance(reply, str) and len(reply) > 0:
            return reply
        return None
