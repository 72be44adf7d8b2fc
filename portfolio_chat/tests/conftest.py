"""Pytest 公共配置：日志写到临时目录，避免污染工作区。"""

import os
import tempfile

os.environ.setdefault("CHAT_LOG_DIR", os.path.join(tempfile.gettempdir(), "portfolio_chat_test_logs"))
