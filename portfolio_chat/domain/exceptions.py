"""聊天组件的业务异常模型。

Worker 客户端只负责把传输层/HTTP 层的问题翻译成下面的异常，
是否以及如何展示给访客由 RequestCoordinator 决定。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "NETWORK_ERROR"）。
        message: 诊断信息，只写入日志，不直接展示给访客。
        http_status: 对应的 HTTP 状态码，默认 400。
        extra: 其他补充字段（例如 endpoint）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """无法连上 worker：DNS 失败、连接被拒、超时等。"""


class ApiError(BusinessError):
    """worker 返回了非 2xx 状态码。"""
