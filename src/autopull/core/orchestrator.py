"""同步流程编排：配置 -> 拉取仓库列表 -> 并发 clone/pull -> 失败汇总."""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from autopull.config import Settings, SyncConfig, resolve_token
from autopull.core.fetcher import RepositoryFetcher
from autopull.core.git import run_git
from autopull.core.platforms import create_platform
from autopull.core.pool import run_pool
from autopull.core.sync_task import GitRunner, build_sync_task, mask_credentials
from autopull.models.outcome import SyncReport, TaskAction, TaskOutcome, TaskStatus
from autopull.models.repository import RepositoryRecord

logger = logging.getLogger(__name__)

REPOS_DUMP_FILE = "repos.json"
FAILURE_LOG_FILE = "failed_repos.json"


async def run_sync(
    config: SyncConfig,
    *,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
    runner: GitRunner = run_git,
) -> SyncReport:
    """
    执行一次完整同步.

    拉取仓库列表失败时抛出 FetchError，不做任何同步；
    单个仓库失败只记录在报告中。

    Args:
        config: 同步配置
        settings: 环境配置（用于 token 回退）
        client: 自定义 HTTP 客户端
        runner: git 执行函数

    Returns:
        SyncReport: 每个仓库的同步结果
    """
    token = resolve_token(config, settings)

    root = config.destination_root
    root.mkdir(parents=True, exist_ok=True)

    platform = create_platform(config.platform, config.username, token)

    logger.info(f"正在从 {platform.name} 拉取 {config.username} 的仓库列表...")
    fetcher = RepositoryFetcher(platform, client=client)
    records = await fetcher.fetch_all()

    _write_json(
        root / REPOS_DUMP_FILE,
        [record.model_dump(mode="json") for record in records],
        description="仓库列表",
    )

    logger.info(f"共 {len(records)} 个仓库，目标目录: {root}")

    total = len(records)
    tasks = [
        build_sync_task(
            record,
            destination_root=root,
            clone_url=platform.clone_url,
            timeout_seconds=config.timeout_seconds,
            index=i,
            total=total,
            runner=runner,
        )
        for i, record in enumerate(records, 1)
    ]
    results = await run_pool(tasks, config.concurrency)

    report = SyncReport(
        outcomes=[
            outcome if outcome is not None else _crashed_outcome(record, root)
            for record, outcome in zip(records, results, strict=True)
        ]
    )

    if report.failures:
        _write_json(
            root / FAILURE_LOG_FILE,
            [outcome.to_dict() for outcome in report.failures],
            description="失败记录",
        )
        logger.warning(f"同步完成: {len(report.failures)}/{total} 个仓库失败")
        for outcome in report.failures:
            logger.warning(f"  ✗ {outcome.repo_name}: {outcome.reason}")
    else:
        logger.info(
            f"同步完成: 全部成功 (克隆={len(report.cloned)}, 更新={len(report.updated)})"
        )

    return report


def _crashed_outcome(record: RepositoryRecord, root: Path) -> TaskOutcome:
    """任务本身异常退出（未产生结果）时的兜底记录."""
    action = TaskAction.PULL if (root / record.name).exists() else TaskAction.CLONE
    return TaskOutcome(
        repo_name=record.name,
        action=action,
        status=TaskStatus.FAILED,
        reason="任务异常终止",
    )


def _write_json(path: Path, data: Any, description: str) -> None:
    """写入诊断文件，失败只记录日志."""
    try:
        text = json.dumps(data, ensure_ascii=False, indent=2, default=str)
        path.write_text(mask_credentials(text), encoding="utf-8")
        logger.info(f"{description}已写入 {path}")
    except OSError as e:
        logger.error(f"{description}写入失败: {path} - {e}")
