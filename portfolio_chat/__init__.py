"""Portfolio Chat 顶层包。

该包提供作品集网站聊天助手的核心实现，
包括配置加载、会话消息存储、单飞请求协调、
worker HTTP 适配、日志以及与 UI 框架无关的弹窗控制器。
"""

from portfolio_chat.api.service import ChatSession, create_session

__all__ = ["ChatSession", "create_session"]
