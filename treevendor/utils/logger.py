"""treevendor 日志配置

人类可读格式用于交互式终端，JSON 格式便于 CI 流水线采集。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

_PLAIN_FORMAT = "[%(levelname)-7s] %(message)s"
_DEBUG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器

    输出格式:
        {"timestamp": "...", "level": "INFO", "logger": "treevendor.x",
         "message": "...", "exception": "..." (仅在有异常时)}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器，输出到 stderr

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR）
        json_output: 为 True 时使用 JSON 格式

    DEBUG 级别下附带时间戳和 logger 名称，其余级别只输出级别和消息。
    """
    reset_logging()
    root = logging.getLogger()
    numeric = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric)

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    elif numeric <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(_DEBUG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    root.addHandler(handler)


def reset_logging() -> None:
    """清理根日志器上的所有 handler，常用于测试或重新配置"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
