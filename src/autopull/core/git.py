"""git 子进程封装."""

import asyncio
import logging
import os
import signal
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

logger = logging.getLogger(__name__)


class CommandStatus(StrEnum):
    """子进程执行结果类型."""

    OK = "ok"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class CommandResult:
    """子进程执行结果."""

    status: CommandStatus
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None  # 无法启动进程时的错误信息

    @property
    def ok(self) -> bool:
        return self.status is CommandStatus.OK

    @property
    def message(self) -> str:
        """失败原因文本."""
        if self.error:
            return self.error
        text = self.stderr.strip() or self.stdout.strip()
        if text:
            return text
        return f"进程退出码 {self.returncode}"


async def run_command(
    argv: Sequence[str],
    cwd: Path | None = None,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """
    执行子进程并等待结束.

    超时后强制结束整个进程组并返回 TIMED_OUT，不抛出异常。
    git clone/pull 会启动 git-remote-https 等子进程，只结束 git 本身无法释放管道。
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            cwd=cwd,
            env=env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,  # 独立进程组，超时时连同子进程一起结束
        )
    except OSError as e:
        return CommandResult(status=CommandStatus.FAILED, error=str(e))

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except TimeoutError:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except OSError:
            process.kill()
        await process.wait()
        logger.debug(f"进程超时已终止: {argv[0]} (pid={process.pid})")
        return CommandResult(status=CommandStatus.TIMED_OUT, returncode=process.returncode)

    status = CommandStatus.OK if process.returncode == 0 else CommandStatus.FAILED
    return CommandResult(
        status=status,
        returncode=process.returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )


async def run_git(
    args: Sequence[str],
    cwd: Path | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """执行 git 命令，禁用交互式凭证提示."""
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return await run_command(["git", *args], cwd=cwd, timeout=timeout, env=env)
