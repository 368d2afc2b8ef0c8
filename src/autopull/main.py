"""autopull 命令行入口."""

import asyncio
import logging
import sys

import click

from autopull import __version__
from autopull.config import build_sync_config, get_settings
from autopull.core.orchestrator import run_sync
from autopull.errors import AutopullError
from autopull.utils.fileops import delete_empty_dirs, delete_files_by_pattern

logger = logging.getLogger(__name__)

# 部分仓库同步失败时的退出码
EXIT_PARTIAL_FAILURE = 2


def _setup_logging(level: str) -> None:
    """配置日志."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.version_option(__version__, prog_name="autopull")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="日志级别（默认读取 AUTOPULL_LOG_LEVEL）",
)
def cli(log_level: str | None) -> None:
    """批量同步 GitHub/Gitee 仓库，并提供文件清理工具."""
    _setup_logging(log_level or get_settings().log_level)


@cli.command("sync")
@click.option("--username", "-u", required=True, help="平台用户名")
@click.option("--token", "-t", default=None, help="访问凭证（默认读取 AUTOPULL_TOKEN）")
@click.option(
    "--platform",
    "-p",
    type=click.Choice(["github", "gitee"]),
    required=True,
    help="代码托管平台",
)
@click.option("--clone-dir", "-d", default=None, help="仓库存放目录")
@click.option("--concurrency", "-c", type=int, default=None, help="最大并发数")
@click.option("--timeout-ms", type=int, default=None, help="单个仓库 git 操作超时（毫秒）")
def sync_command(
    username: str,
    token: str | None,
    platform: str,
    clone_dir: str | None,
    concurrency: int | None,
    timeout_ms: int | None,
) -> None:
    """克隆或更新用户的全部仓库."""
    settings = get_settings()
    try:
        config = build_sync_config(
            username=username,
            token=token,
            platform=platform,
            clone_dir=clone_dir or settings.clone_dir,
            concurrency=settings.concurrency if concurrency is None else concurrency,
            timeout_ms=settings.timeout_ms if timeout_ms is None else timeout_ms,
        )
        report = asyncio.run(run_sync(config, settings=settings))
    except AutopullError as e:
        click.secho(f"✗ {e}", fg="red", err=True)
        sys.exit(1)

    click.echo()
    if report.ok:
        click.secho(
            f"✓ 全部 {len(report.outcomes)} 个仓库同步成功 "
            f"(克隆 {len(report.cloned)}, 更新 {len(report.updated)})",
            fg="green",
        )
        return

    click.secho(
        f"✗ {len(report.failures)}/{len(report.outcomes)} 个仓库同步失败:",
        fg="red",
        bold=True,
    )
    for outcome in report.failures:
        click.echo(f"  - {outcome.repo_name}: {outcome.reason}")
    sys.exit(EXIT_PARTIAL_FAILURE)


@cli.command("clean-files")
@click.argument("target_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--pattern", required=True, help="文件名或通配符，如 '*.log'")
@click.option("--recursive", "-r", is_flag=True, help="同时处理子目录")
def clean_files_command(target_dir: str, pattern: str, recursive: bool) -> None:
    """按模式删除文件."""
    deleted = delete_files_by_pattern(target_dir, pattern, recursive=recursive)
    for path in deleted:
        click.echo(f"  - {path}")
    click.secho(f"✓ 删除了 {len(deleted)} 个文件", fg="green")


@cli.command("clean-dirs")
@click.argument("target_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--recursive", "-r", is_flag=True, help="递归清理子目录")
def clean_dirs_command(target_dir: str, recursive: bool) -> None:
    """删除空文件夹."""
    deleted = delete_empty_dirs(target_dir, recursive=recursive)
    for path in deleted:
        click.echo(f"  - {path}")
    click.secho(f"✓ 删除了 {len(deleted)} 个空文件夹", fg="green")


if __name__ == "__main__":
    cli()
