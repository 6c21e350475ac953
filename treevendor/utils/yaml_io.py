"""YAML 文件读写工具

工作区标记文件同时也是配置文件，统一在此读写。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from treevendor.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_yaml(path: str | Path) -> dict[str, Any]:
    """读取 YAML 文件

    返回:
        dict: 文件不存在或为空时返回空字典

    异常:
        ConfigError: 内容不是合法 YAML，或顶层不是字典
    """
    p = Path(path)
    if not p.exists():
        return {}

    try:
        with open(p, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"解析 YAML 文件失败: {p}: {e}") from e

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ConfigError(
            f"{p} 顶层必须是字典 (实际类型: {type(result).__name__})"
        )
    return result


def dump_yaml(data: Any) -> str:
    """序列化为 YAML 文本，保持键顺序"""
    return yaml.dump(
        data, default_flow_style=False,
        allow_unicode=True, sort_keys=False,
    )
