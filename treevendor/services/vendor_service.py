"""Vendor 服务: init / get / push 三个命令的处理逻辑

get 的流程:
  1. 校验工作区（GOPATH、标记文件、.git）
  2. 依赖闭包遍历：平台依赖合并为子树，其他依赖 go get
  3. 清理 vendor 树中的嵌套 .git
  4. git add src 并提交（暂存区为空时不提交）

任何一步抛出异常都会跳过提交，不完整的闭包不落盘。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from treevendor.core.config import GIT_DIR, Config
from treevendor.core.exceptions import TreeVendorError, ValidationError
from treevendor.core.vendor import (
    ClosureWalker,
    FetchState,
    MergeOutcome,
    remote_url,
    root_of,
    sanitize,
)
from treevendor.services.git_engine import GitEngine
from treevendor.utils.yaml_io import dump_yaml

logger = logging.getLogger(__name__)

DEFAULT_GITIGNORE = """pkg
bin
.DS_Store
*.cov
"""

SETENV_FILE = "setenv.bash"

SETENV_SCRIPT = """#!/bin/bash

DIR=$( cd "$( dirname "${BASH_SOURCE[0]}" )" && pwd )
export GOPATH=$DIR
export PATH=$GOPATH/bin:$PATH
"""


@dataclass
class FetchReport:
    """get 命令结果汇总"""

    package: str
    branch: str
    state: FetchState
    removed_git_dirs: list[Path] = field(default_factory=list)
    committed: bool = False

    @property
    def added(self) -> int:
        return self.state.count(MergeOutcome.ADDED)

    @property
    def pulled(self) -> int:
        return self.state.count(MergeOutcome.PULLED)

    @property
    def skipped(self) -> int:
        return self.state.count(MergeOutcome.SKIPPED)


@dataclass
class PushReport:
    """push 命令结果汇总"""

    pushed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed


class VendorService:
    """子树 vendor 命令处理"""

    def __init__(
        self,
        config: Config,
        git: GitEngine,
        walker: ClosureWalker,
    ) -> None:
        self.config = config
        self.git = git
        self.walker = walker
        self.layout = walker.layout

    # ------------------------------------------------------------------
    # init
    # ------------------------------------------------------------------

    def init(self) -> list[str]:
        """在 workspace_root 初始化 git 仓库并提交默认文件，返回提交的文件名"""
        root = self.config.workspace_root
        if (root / GIT_DIR).exists():
            raise ValidationError(f"{root} 已包含 .git 目录，无法初始化")

        self.git.init()
        files = [
            (".gitignore", DEFAULT_GITIGNORE),
            (self.config.marker_file, dump_yaml(self.config.to_file_dict())),
            (SETENV_FILE, SETENV_SCRIPT),
        ]
        for name, content in files:
            self._write_and_commit(name, content)

        logger.info("已初始化 git 仓库，请更新 GOPATH 和 PATH（%s 会完成设置）", SETENV_FILE)
        logger.info("  source ./%s", SETENV_FILE)
        return [name for name, _ in files]

    def _write_and_commit(self, name: str, content: str) -> None:
        path = self.config.workspace_root / name
        if path.exists():
            raise ValidationError(f"{self.config.workspace_root} 已包含 {name}，无法初始化")
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise TreeVendorError(f"无法写入 {path}: {e}") from e
        self.git.add(name)
        self.git.commit(f"{self.config.commit_prefix} Initialized {name}", paths=[name])
        logger.info("已初始化并提交 %s", name)

    # ------------------------------------------------------------------
    # get
    # ------------------------------------------------------------------

    def get(self, package: str, branch: str, *, update: bool = False) -> FetchReport:
        """vendor package 及其全部传递依赖并提交"""
        self.config.require_workspace()
        package = self._require_forge_package(package, min_segments=3)
        logger.info("使用分支 %s", branch)

        state = self.walker.fetch_closure(package, branch, update, FetchState())
        removed = sanitize(self.layout.source_root)

        report = FetchReport(
            package=package, branch=branch, state=state, removed_git_dirs=removed,
        )
        self.git.add(self.config.source_dir)
        if self.git.has_staged_changes():
            self.git.commit(
                f"{self.config.commit_prefix} Added {package} and its dependencies",
            )
            report.committed = True
        else:
            logger.info("没有变更需要提交")
        return report

    # ------------------------------------------------------------------
    # push
    # ------------------------------------------------------------------

    def push(self, package: str, branch: str) -> PushReport:
        """把 vendor 子树推回远程

        package 至少三段时推送其仓库根；只有 host/owner 两段时
        推送该 owner 下的每个子目录，单个失败不影响其余。
        """
        self.config.require_workspace()
        package = self._require_forge_package(package, min_segments=2)
        logger.info("使用分支 %s", branch)
        report = PushReport()

        if len(package.split("/")) > 2:
            logger.info("推送单个包 %s", package)
            self._push_root(root_of(package), branch)
            report.pushed.append(root_of(package))
            return report

        logger.info("推送 %s 下的全部子包", package)
        owner_dir = self.layout.source_root.joinpath(*package.split("/"))
        if not owner_dir.is_dir():
            raise ValidationError(f"无法列出 {package} 的子包: {owner_dir} 不存在")

        for entry in sorted(owner_dir.iterdir()):
            if not entry.is_dir():
                continue
            repo_root = f"{package}/{entry.name}"
            try:
                self._push_root(repo_root, branch)
            except TreeVendorError as e:
                logger.error("推送 %s 失败: %s", repo_root, e)
                report.failed[repo_root] = str(e)
                continue
            report.pushed.append(repo_root)
        return report

    def _push_root(self, repo_root: str, branch: str) -> None:
        self.git.subtree_push(self.layout.prefix(repo_root), remote_url(repo_root), branch)

    def _require_forge_package(self, package: str, min_segments: int) -> str:
        package = package.strip().strip("/")
        if not package:
            raise ValidationError("请指定包路径")
        if not self.layout.is_forge_native(package):
            raise ValidationError(
                f"只支持托管在 {self.config.forge_host} 上的包: {package}"
            )
        if len(package.split("/")) < min_segments:
            raise ValidationError(f"包路径至少需要 {min_segments} 段: {package}")
        return package
