import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from portfolio_chat.config.settings import settings


# worker 响应体可能原样回显访客输入，脱敏时整体去掉
CONTENT_FIELDS = ("body",)
REDACTED_MSG_CHARS = 64


class JsonFormatter(logging.Formatter):
    """每条记录一行 JSON：ts/level/name/msg 加上 extra 中的字段。"""

    def format(self, record: logging.LogRecord) -> str:
        redact = settings.log_redact_content
        msg = record.getMessage()
        if redact:
            msg = (msg or "")[:REDACTED_MSG_CHARS]
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
            if redact:
                for key in CONTENT_FIELDS:
                    if key in payload:
                        payload[key] = "[redacted]"
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("portfolio_chat")
    logger.setLevel(logging.INFO)
    if any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "chat.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
