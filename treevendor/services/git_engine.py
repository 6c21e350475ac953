"""Git 操作封装

所有命令以工作区根为 cwd 执行，失败统一抛 ExecutionError，
错误消息带上 git 的原始输出。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from treevendor.core.config import Config
from treevendor.core.exceptions import ExecutionError
from treevendor.utils.shell import CommandExecutor, CommandResult, LocalExecutor, run_checked

logger = logging.getLogger(__name__)


class GitEngine:
    """工作区 git 仓库操作"""

    def __init__(self, config: Config, executor: CommandExecutor | None = None) -> None:
        self.config = config
        self.executor = executor or LocalExecutor()

    def _git(self, *args: str) -> CommandResult:
        return run_checked(
            self.executor, [self.config.git_bin, *args],
            cwd=str(self.config.workspace_root),
            timeout=self.config.command_timeout,
        )

    def init(self) -> None:
        self._git("init")

    def add(self, *paths: str) -> None:
        self._git("add", *paths)

    def commit(self, message: str, paths: Sequence[str] = ()) -> None:
        self._git("commit", *paths, "-m", message)

    def has_staged_changes(self) -> bool:
        """暂存区是否有待提交内容（diff --cached --quiet 返回 1 表示有）

        异常:
            ExecutionError: git diff 本身失败（返回码非 0/1）
        """
        args = [self.config.git_bin, "diff", "--cached", "--quiet"]
        r = self.executor.execute(
            args, cwd=str(self.config.workspace_root),
            timeout=self.config.command_timeout,
        )
        if r.returncode not in (0, 1):
            raise ExecutionError(f"{args[0]} 失败 (rc={r.returncode}): {r.output}")
        return r.returncode == 1

    # ---- 子树 ----

    def subtree_add(self, prefix: str, url: str, branch: str) -> None:
        self._git("subtree", "add", "--squash", "--prefix", prefix, url, branch)

    def subtree_pull(self, prefix: str, url: str, branch: str) -> None:
        self._git("subtree", "pull", "--squash", "--prefix", prefix, url, branch)

    def subtree_push(self, prefix: str, url: str, branch: str) -> None:
        self._git("subtree", "push", "--prefix", prefix, url, branch)
