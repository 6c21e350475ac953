"""CLI: 子树 vendor 命令: get / push"""

from __future__ import annotations

import click

from treevendor.cli import _container, friendly_errors


def register(group: click.Group) -> None:
    group.add_command(get)
    group.add_command(push)


@click.command()
@click.argument("package")
@click.argument("branch")
@click.option("-u", "--update", is_flag=True, help="已存在的子树也从远程更新")
@click.pass_context
@friendly_errors
def get(ctx: click.Context, package: str, branch: str, update: bool) -> None:
    """类似 go get，但平台托管的依赖以子树方式合并进仓库"""
    report = _container(ctx).vendor.get(package, branch, update=update)

    click.echo(
        f"{report.package}@{report.branch}: "
        f"新增 {report.added}  更新 {report.pulled}  跳过 {report.skipped}  "
        f"go get {len(report.state.foreign)}"
    )
    for m in report.state.merges:
        click.echo(f"  [{m.outcome.value:7s}] {m.repo_root} ({m.branch})")
    for path in report.state.foreign:
        click.echo(f"  [go get ] {path}")
    if report.removed_git_dirs:
        click.echo(f"已清理 {len(report.removed_git_dirs)} 个嵌套 .git 目录")
    click.echo("已提交" if report.committed else "没有变更需要提交")


@click.command()
@click.argument("package")
@click.argument("branch")
@click.pass_context
@friendly_errors
def push(ctx: click.Context, package: str, branch: str) -> None:
    """把子树改动推回远程仓库（只给 host/owner 时推送其下全部仓库）"""
    report = _container(ctx).vendor.push(package, branch)

    for root in report.pushed:
        click.echo(f"  [OK  ] {root}")
    for root, err in report.failed.items():
        click.echo(f"  [FAIL] {root}: {err}", err=True)
    if not report.success:
        raise click.ClickException(f"{len(report.failed)} 个仓库推送失败")
