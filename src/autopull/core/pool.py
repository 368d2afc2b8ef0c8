"""有限并发的异步任务池."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_pool(
    tasks: Sequence[Callable[[], Awaitable[T]]],
    concurrency: int,
) -> list[T | None]:
    """
    并发执行任务，同一时刻最多 concurrency 个在运行.

    每个 worker 循环领取下一个未执行的任务下标，直到全部领完。
    单个任务抛出异常只记录日志，不影响其他任务。

    Args:
        tasks: 无参异步函数列表
        concurrency: 最大并发数

    Returns:
        list: 与 tasks 下标对应的结果，异常的任务为 None
    """
    if concurrency < 1:
        msg = f"并发数必须为正整数: {concurrency}"
        raise ValueError(msg)

    results: list[T | None] = [None] * len(tasks)
    next_index = 0

    async def worker(worker_id: int) -> None:
        nonlocal next_index
        while next_index < len(tasks):
            # 领取下标与自增之间没有 await，协程调度下是原子的
            index = next_index
            next_index += 1
            try:
                results[index] = await tasks[index]()
            except Exception:
                logger.exception(f"任务 #{index + 1} 执行异常 (worker {worker_id})")

    workers = [worker(i) for i in range(min(concurrency, len(tasks)))]
    await asyncio.gather(*workers)
    return results
