"""treevendor 命令行接口

命令按领域拆分为子模块，每个模块注册自己的命令到 main group。
内部组件只抛 TreeVendorError，由这里统一转成 click 的错误输出和退出码。
"""

from __future__ import annotations

import functools
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from treevendor import __version__
from treevendor.core.config import Config
from treevendor.core.exceptions import TreeVendorError
from treevendor.services.container import ServiceContainer
from treevendor.utils.logger import setup_logging

F = TypeVar("F", bound=Callable[..., Any])


def _container(ctx: click.Context, *, from_cwd: bool = False) -> ServiceContainer:
    """按上下文构造服务容器

    ctx.obj 可携带 "executor" 与 "env"（测试时注入），
    from_cwd=True 时以当前目录为工作区（init），否则从 GOPATH 加载。
    """
    obj = ctx.ensure_object(dict)
    if from_cwd:
        config = Config(workspace_root=Path.cwd())
    else:
        config = Config.load(obj.get("env"))
    return ServiceContainer(config, executor=obj.get("executor"))


def friendly_errors(func: F) -> F:
    """把 TreeVendorError 转换为 ClickException（stderr 输出，退出码 1）"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except TreeVendorError as e:
            raise click.ClickException(f"[{e.code}] {e}") from e

    return wrapper  # type: ignore[return-value]


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context) -> None:
    """treevendor - 把 Go 依赖以 git subtree 方式 vendor 进宿主仓库"""
    if ctx.invoked_subcommand is None:
        raise click.UsageError("请指定命令", ctx)
    setup_logging(
        level=os.getenv("TREEVENDOR_LOG_LEVEL", "INFO"),
        json_output=os.getenv("TREEVENDOR_LOG_JSON", "") == "1",
    )


# 注册各领域子命令
from treevendor.cli.cmd_init import register as _reg_init  # noqa: E402
from treevendor.cli.cmd_vendor import register as _reg_vendor  # noqa: E402

_reg_init(main)
_reg_vendor(main)
