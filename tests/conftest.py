"""测试共享 fixture: 录制型命令执行器 + 临时工作区

RecordingExecutor 模拟 git / go:
  - go list      按 imports 表返回依赖
  - git subtree add  在 cwd 下创建 prefix 目录，模拟子树落盘
  - git diff --cached --quiet  按 staged 返回 0/1
  - 其余命令成功返回
fail_if() 注册的谓词命中时返回非零退出码，用于验证错误传播。
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from treevendor.core.config import Config
from treevendor.services.container import ServiceContainer
from treevendor.utils.logger import reset_logging
from treevendor.utils.shell import CommandResult


class RecordingExecutor:
    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.envs: list[dict[str, str] | None] = []
        self.imports: dict[str, list[str]] = {}
        self.staged = True
        self._failures: list[tuple[Callable[[list[str]], bool], str, int]] = []

    def fail_if(
        self, predicate: Callable[[list[str]], bool], stderr: str = "boom", returncode: int = 1,
    ) -> None:
        self._failures.append((predicate, stderr, returncode))

    def execute(
        self,
        args: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        args = list(args)
        self.calls.append(args)
        self.envs.append(env)

        for predicate, stderr, returncode in self._failures:
            if predicate(args):
                return CommandResult(returncode=returncode, stdout="", stderr=stderr)

        if args[:2] == ["go", "list"]:
            return CommandResult(0, " ".join(self.imports.get(args[-1], [])) + "\n", "")
        if args[:3] == ["git", "subtree", "add"]:
            prefix = args[args.index("--prefix") + 1]
            (Path(cwd) / prefix).mkdir(parents=True, exist_ok=True)
        if args[:2] == ["git", "diff"]:
            return CommandResult(1 if self.staged else 0, "", "")
        return CommandResult(0, "", "")

    # ---- 查询 ----

    def subtree_calls(self, action: str | None = None) -> list[list[str]]:
        return [
            c for c in self.calls
            if c[:2] == ["git", "subtree"] and (action is None or c[2] == action)
        ]

    def go_get_calls(self) -> list[list[str]]:
        return [c for c in self.calls if c[:2] == ["go", "get"]]

    def commit_calls(self) -> list[list[str]]:
        return [c for c in self.calls if c[:2] == ["git", "commit"]]


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """已初始化的工作区：包含 .git 和标记文件"""
    (tmp_path / ".git").mkdir()
    (tmp_path / ".treevendor.yml").write_text("forge_host: github.com\n", encoding="utf-8")
    return tmp_path


@pytest.fixture()
def config(workspace: Path) -> Config:
    return Config(workspace_root=workspace)


@pytest.fixture()
def container(config: Config, executor: RecordingExecutor) -> ServiceContainer:
    return ServiceContainer(config, executor=executor)


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()
