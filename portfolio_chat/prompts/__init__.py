"""系统提示词加载工具。

按语言(locale) 从 prompts/<locale> 目录读取默认的 system prompt，
用于构造 ChatTurn(role="system")。部署时通常通过 CHAT_SYSTEM_PROMPT
或 config.yaml 覆盖为自己的介绍。
"""

from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


def load_system_prompt(locale: str = "en") -> str:
    """加载作品集助手的默认系统提示词文本（去掉首尾空白）。"""

    fname = PROMPTS_DIR / locale / "portfolio_system.md"
    return fname.read_text(encoding="utf-8").strip()
