"""外部命令执行工具: 统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，git / go 等外部工具都经由此处调用，
测试时注入录制型实现即可，无需 patch subprocess。
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

from treevendor.core.exceptions import ExecutionError, TreeVendorError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """合并输出，失败时原样呈现给操作者"""
        return (self.stdout + self.stderr).strip()


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议: 抽象子进程调用"""

    def execute(
        self,
        args: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        args: list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        try:
            r = subprocess.run(
                args, capture_output=True, text=True,
                cwd=cwd, env=env, check=False, timeout=timeout,
            )
        except FileNotFoundError as e:
            return CommandResult(returncode=127, stdout="", stderr=str(e))
        except subprocess.TimeoutExpired as e:
            return CommandResult(
                returncode=-1, stdout="",
                stderr=f"超时 ({timeout}s): {' '.join(args)} {e}",
            )
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


# =========================================================================
# 便捷函数
# =========================================================================

def run_checked(
    executor: CommandExecutor,
    args: list[str],
    *,
    cwd: str = ".",
    env: dict[str, str] | None = None,
    timeout: int | None = None,
    error_cls: type[TreeVendorError] = ExecutionError,
) -> CommandResult:
    """执行命令，失败时抛 error_cls，消息中带上工具的原始输出

    Args:
        executor: 命令执行器
        args: 命令及参数
        cwd: 工作目录
        env: 环境变量（不传则继承当前进程）
        timeout: 超时秒数，None 表示不限
        error_cls: 失败时抛出的异常类型
    """
    logger.info("执行 %s", " ".join(args))
    r = executor.execute(args, cwd=cwd, env=env, timeout=timeout)
    if not r.success:
        raise error_cls(f"{args[0]} 失败 (rc={r.returncode}): {r.output}")
    return r
