"""Worker 客户端抽象接口。

RequestCoordinator 不直接依赖 httpx，而是依赖此协议：

- 默认实现是 HttpWorkerClient（POST JSON 到代理/worker）。
- 测试里可以用任意带 async send() 的假对象替换。
"""

from typing import Any, Dict, List, Optional, Protocol


class WorkerClient(Protocol):
    """聊天 worker 客户端协议。

    send(messages):
        - 返回 reply 文本；worker 有响应但没有可用 reply 时返回 None。
        - 连不上时抛出 NetworkError，非 2xx 时抛出 ApiError。
    """

    name: str

    async def send(self, messages: List[Dict[str, Any]]) -> Optional[str]:
        ...
