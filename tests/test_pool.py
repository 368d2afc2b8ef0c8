"""测试有限并发任务池."""

import asyncio

import pytest

from autopull.core.pool import run_pool


class TestRunPool:
    """测试 run_pool."""

    async def test_runs_every_task_once(self) -> None:
        """每个任务恰好执行一次，结果按下标存放."""
        calls: list[int] = []

        def make(i: int):
            async def task() -> int:
                calls.append(i)
                await asyncio.sleep(0.01 * (5 - i % 5))
                return i * 10

            return task

        results = await run_pool([make(i) for i in range(10)], concurrency=3)

        assert sorted(calls) == list(range(10))
        assert results == [i * 10 for i in range(10)]

    async def test_never_exceeds_concurrency(self) -> None:
        """同一时刻运行的任务数不超过并发上限."""
        in_flight = 0
        peak = 0

        async def task() -> None:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1

        await run_pool([task] * 8, concurrency=2)

        assert peak == 2

    async def test_failing_task_does_not_stop_siblings(self) -> None:
        """单个任务异常不影响其他任务，异常任务结果为 None."""
        done: list[int] = []

        def make(i: int):
            async def task() -> int:
                await asyncio.sleep(0)
                if i == 1:
                    raise RuntimeError("boom")
                done.append(i)
                return i

            return task

        results = await run_pool([make(i) for i in range(5)], concurrency=2)

        assert sorted(done) == [0, 2, 3, 4]
        assert results == [0, None, 2, 3, 4]

    async def test_completes_after_slowest_task(self) -> None:
        """所有任务结束后才返回."""
        finished: list[str] = []

        async def slow() -> None:
            await asyncio.sleep(0.05)
            finished.append("slow")

        async def fast() -> None:
            finished.append("fast")

        await run_pool([slow, fast, fast], concurrency=3)

        assert finished.count("fast") == 2
        assert "slow" in finished

    async def test_empty_task_list(self) -> None:
        """空任务列表直接返回."""
        assert await run_pool([], concurrency=5) == []

    async def test_concurrency_larger_than_tasks(self) -> None:
        """并发数大于任务数时正常执行."""

        async def task() -> str:
            return "ok"

        assert await run_pool([task, task], concurrency=10) == ["ok", "ok"]

    async def test_rejects_non_positive_concurrency(self) -> None:
        """并发数必须为正."""

        async def task() -> None:
            return None

        with pytest.raises(ValueError):
            await run_pool([task], concurrency=0)
