"""CLI: 工作区初始化"""

from __future__ import annotations

import click

from treevendor.cli import _container, friendly_errors


def register(group: click.Group) -> None:
    group.add_command(init)


@click.command()
@click.pass_context
@friendly_errors
def init(ctx: click.Context) -> None:
    """在当前目录初始化 git 仓库，之后把 GOPATH 指向这里"""
    files = _container(ctx, from_cwd=True).vendor.init()
    click.echo(f"已初始化: {', '.join(files)}")
    click.echo("请执行: source ./setenv.bash")
