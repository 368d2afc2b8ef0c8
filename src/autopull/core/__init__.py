"""核心同步逻辑."""

from autopull.core.fetcher import RepositoryFetcher
from autopull.core.orchestrator import run_sync
from autopull.core.platforms import GiteePlatform, GitHubPlatform, Platform, create_platform
from autopull.core.pool import run_pool
from autopull.core.sync_task import build_sync_task

__all__ = [
    "GiteePlatform",
    "GitHubPlatform",
    "Platform",
    "RepositoryFetcher",
    "build_sync_task",
    "create_platform",
    "run_pool",
    "run_sync",
]
