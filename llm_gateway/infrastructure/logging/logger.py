"""网关 JSON 行日志。

每条记录一行 JSON：ts / level / name / msg，外加调用方通过
extra={"extra": {...}} 传入的字段。开启 log_redact_content 时，
消息本身以及可能回显模型内容的字段会被截断。
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from llm_gateway.config.settings import settings

LOGGER_NAME = "llm_gateway"
LOG_FILE_NAME = "gateway.log"
REDACT_LIMIT = 64
# 供应商错误信息和模型回复可能包含用户对话内容
CONTENT_FIELDS = ("error", "response")


class JsonFormatter(logging.Formatter):
    def __init__(self, redact: bool = False):
        super().__init__()
        self.redact = redact

    def _clip(self, value: Any) -> Any:
        if self.redact and isinstance(value, str):
            return value[:REDACT_LIMIT]
        return value

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": self._clip(record.getMessage() or ""),
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            for key, value in extra.items():
                payload[key] = self._clip(value) if key in CONTENT_FIELDS else value
        if record.exc_info:
            payload["exc"] = self._clip(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(log_dir: Optional[str] = None, redact: Optional[bool] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    path = Path(log_dir or settings.log_dir) / LOG_FILE_NAME

    # 重复导入或多次调用时不重复挂载同一个文件
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(path):
            return logger

    path.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(path, encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter(settings.log_redact_content if redact is None else redact))
    logger.addHandler(fh)
    return logger


logger = setup_logger()
