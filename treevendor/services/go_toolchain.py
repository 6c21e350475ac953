"""Go 工具链封装

- go list: 查询包的传递依赖和测试依赖
- go get: 拉取非平台托管的单个包

两者都在 GOPATH 指向工作区的环境中执行，失败抛 DependencyError。
"""

from __future__ import annotations

import logging

from treevendor.core.config import Config
from treevendor.core.exceptions import DependencyError
from treevendor.utils.shell import CommandExecutor, LocalExecutor, run_checked

logger = logging.getLogger(__name__)

# 依赖与测试依赖合并输出
LIST_TEMPLATE = "{{range .Deps}}{{.}} {{end}} {{range .TestImports}}{{.}} {{end}}"


class GoToolchain:
    def __init__(self, config: Config, executor: CommandExecutor | None = None) -> None:
        self.config = config
        self.executor = executor or LocalExecutor()

    def _go(self, *args: str) -> str:
        r = run_checked(
            self.executor, [self.config.go_bin, *args],
            cwd=str(self.config.workspace_root),
            env=self.config.tool_env(),
            timeout=self.config.command_timeout,
            error_cls=DependencyError,
        )
        return r.stdout

    def list_transitive_imports(self, package: str) -> str:
        return self._go("list", "-f", LIST_TEMPLATE, package)

    def fetch_package(self, import_path: str, update: bool) -> None:
        if update:
            self._go("get", "-u", import_path)
        else:
            self._go("get", import_path)
