"""服务容器: 统一依赖注入

CLI 通过容器获取服务，同一容器内的实例共享 Config 和 CommandExecutor。
测试时注入录制型 executor，即可在不调用 git / go 的情况下走完整条链路。

依赖关系图（→ 表示依赖）:
  vendor → git, walker
  walker → git (子树合并), go (依赖枚举 + 单包拉取)

用法:
    container = ServiceContainer(Config.load())
    report = container.vendor.get("github.com/a/b/cmd", "master")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from treevendor.core.config import Config
from treevendor.utils.shell import CommandExecutor, LocalExecutor

if TYPE_CHECKING:
    from treevendor.core.vendor import ClosureWalker, VendorLayout
    from treevendor.services.git_engine import GitEngine
    from treevendor.services.go_toolchain import GoToolchain
    from treevendor.services.vendor_service import VendorService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器"""

    def __init__(
        self,
        config: Config,
        executor: CommandExecutor | None = None,
    ) -> None:
        self._instances: dict[str, object] = {}
        self._config = config
        self._executor = executor or LocalExecutor()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def layout(self) -> VendorLayout:
        if "layout" not in self._instances:
            from treevendor.core.vendor import VendorLayout
            self._instances["layout"] = VendorLayout(
                workspace_root=self._config.workspace_root,
                source_dir=self._config.source_dir,
                forge_host=self._config.forge_host,
            )
        return self._instances["layout"]  # type: ignore[return-value]

    @property
    def git(self) -> GitEngine:
        if "git" not in self._instances:
            from treevendor.services.git_engine import GitEngine
            self._instances["git"] = GitEngine(self._config, self._executor)
        return self._instances["git"]  # type: ignore[return-value]

    @property
    def go(self) -> GoToolchain:
        if "go" not in self._instances:
            from treevendor.services.go_toolchain import GoToolchain
            self._instances["go"] = GoToolchain(self._config, self._executor)
        return self._instances["go"]  # type: ignore[return-value]

    @property
    def walker(self) -> ClosureWalker:
        if "walker" not in self._instances:
            from treevendor.core.vendor import ClosureWalker, ImportLister, SubtreeMergeDriver
            self._instances["walker"] = ClosureWalker(
                layout=self.layout,
                merger=SubtreeMergeDriver(self.git, self.layout),
                lister=ImportLister(self.go),
                fetcher=self.go,
                dependency_branch=self._config.dependency_branch,
            )
        return self._instances["walker"]  # type: ignore[return-value]

    @property
    def vendor(self) -> VendorService:
        if "vendor" not in self._instances:
            from treevendor.services.vendor_service import VendorService
            self._instances["vendor"] = VendorService(
                config=self._config, git=self.git, walker=self.walker,
            )
        return self._instances["vendor"]  # type: ignore[return-value]
