"""工作区配置

GOPATH 指向的目录即工作区（宿主 git 仓库根），其中的标记文件
.treevendor.yml 同时承载可覆盖的配置项。配置作为显式值传给各组件，
除 Config.load 外不读取进程环境。
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from treevendor.core.exceptions import ConfigError
from treevendor.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

WORKSPACE_ENV = "GOPATH"
MARKER_FILE = ".treevendor.yml"
GIT_DIR = ".git"

# 可以写进标记文件的字段
_FILE_FIELDS = (
    "source_dir", "forge_host", "dependency_branch",
    "git_bin", "go_bin", "command_timeout", "commit_prefix",
)


@dataclass
class Config:
    """工作区配置"""

    workspace_root: Path = field(default_factory=Path.cwd)

    # 布局
    source_dir: str = "src"
    forge_host: str = "github.com"
    marker_file: str = MARKER_FILE

    # 递归拉取依赖时使用的分支；为空则沿用调用方传入的分支
    dependency_branch: str = "master"

    # 外部工具
    git_bin: str = "git"
    go_bin: str = "go"
    command_timeout: int | None = None

    commit_prefix: str = "[treevendor]"

    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path, workspace_root: str | Path) -> Config:
        """从 YAML 文件加载配置，文件不存在则返回默认值"""
        data = load_yaml(path)
        matched = {k: v for k, v in data.items() if k in _FILE_FIELDS}
        extra = {k: v for k, v in data.items() if k not in _FILE_FIELDS}
        try:
            cfg = cls(workspace_root=Path(workspace_root), **matched)
        except TypeError as e:
            raise ConfigError(f"配置文件 {path} 无效: {e}") from e
        cfg.extra = extra
        if extra:
            logger.debug("配置文件中未识别的字段: %s", ", ".join(extra))
        return cfg

    @classmethod
    def load(cls, env: Mapping[str, str] | None = None) -> Config:
        """从 GOPATH 定位工作区并读取其中的标记文件

        异常:
            ConfigError: GOPATH 未设置
        """
        env = os.environ if env is None else env
        root = env.get(WORKSPACE_ENV, "")
        if not root:
            raise ConfigError(f"请先设置 {WORKSPACE_ENV}")
        root_path = Path(root).expanduser()
        cfg = cls.from_file(root_path / MARKER_FILE, root_path)
        logger.debug("工作区: %s", cfg.workspace_root)
        return cfg

    def require_workspace(self) -> None:
        """确认工作区已通过 init 初始化（标记文件和 .git 均存在）"""
        for name in (self.marker_file, GIT_DIR):
            if not (self.workspace_root / name).exists():
                raise ConfigError(
                    f"在 {WORKSPACE_ENV} '{self.workspace_root}' 中找不到 '{name}'，"
                    "请确认已在该目录执行过 treevendor init"
                )

    def to_file_dict(self) -> dict[str, Any]:
        """导出可写入标记文件的字段"""
        data = asdict(self)
        return {k: data[k] for k in _FILE_FIELDS}

    def tool_env(self) -> dict[str, str]:
        """外部工具的环境变量：继承当前进程并把 GOPATH 指向工作区"""
        return {**os.environ, WORKSPACE_ENV: str(self.workspace_root)}
