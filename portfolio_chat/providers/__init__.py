"""Worker 集成层。

该包下的模块负责：
- 定义 Worker 客户端抽象接口 (base)。
- 提供基于 HTTP 的默认实现 (worker_client)。
"""

from portfolio_chat.domain.models import ChatConfig
from portfolio_chat.providers.base import WorkerClient
from portfolio_chat.providers.worker_client import HttpWorkerClient


def create_worker_client(config: ChatConfig) -> WorkerClient:
    """根据配置记录创建默认的 worker 客户端。"""

    return HttpWorkerClient(config)


__all__ = ["WorkerClient", "HttpWorkerClient", "create_worker_client"]
