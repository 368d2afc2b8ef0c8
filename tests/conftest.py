"""测试配置和 fixtures."""

import asyncio
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Any

import httpx
import pytest

from autopull.config import Settings, get_settings
from autopull.core.git import CommandResult, CommandStatus


class FakeGitRunner:
    """记录调用参数的 git 执行函数替身."""

    def __init__(
        self,
        results: dict[str, CommandResult] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.results = results or {}
        self.delay = delay
        self.calls: list[tuple[list[str], Path | None, float | None]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        self.calls.append((list(args), cwd, timeout))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1

        repo_name = self._repo_name(args, cwd)
        return self.results.get(repo_name, CommandResult(status=CommandStatus.OK, returncode=0))

    @staticmethod
    def _repo_name(args: Sequence[str], cwd: Path | None) -> str:
        if args[0] == "clone":
            return Path(args[2]).name
        return cwd.name if cwd else ""

    @property
    def commands(self) -> list[str]:
        return [call[0][0] for call in self.calls]


def make_repos(count: int, start: int = 0) -> list[dict[str, Any]]:
    """生成仓库列表接口的返回数据."""
    return [
        {
            "id": i,
            "name": f"repo-{i}",
            "full_name": f"u/repo-{i}",
            "clone_url": f"https://github.com/u/repo-{i}.git",
        }
        for i in range(start, start + count)
    ]


def paged_transport(
    pages: list[list[dict[str, Any]]],
    requests: list[httpx.Request],
) -> httpx.MockTransport:
    """按 page 参数返回对应页数据的 MockTransport."""

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        page = int(request.url.params["page"])
        data = pages[page - 1] if page <= len(pages) else []
        return httpx.Response(200, json=data)

    return httpx.MockTransport(handler)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """隔离环境变量和 .env 文件."""
    for key in ("AUTOPULL_TOKEN", "AUTOPULL_CLONE_DIR", "AUTOPULL_CONCURRENCY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def empty_settings() -> Settings:
    """不带 token 的配置."""
    return Settings(token="", _env_file=None)


@pytest.fixture
def fake_git() -> FakeGitRunner:
    """默认全部成功的 git 替身."""
    return FakeGitRunner()


@pytest.fixture
def http_requests() -> list[httpx.Request]:
    """记录 MockTransport 收到的请求."""
    return []


@pytest.fixture
def make_client(
    http_requests: list[httpx.Request],
) -> Callable[[list[list[dict[str, Any]]]], httpx.AsyncClient]:
    """按给定分页数据创建 HTTP 客户端."""

    def factory(pages: list[list[dict[str, Any]]]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=paged_transport(pages, http_requests))

    return factory
