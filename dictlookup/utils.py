"""工具类与辅助功能。"""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict
from typing import Any, Awaitable, Dict, Optional, TypeVar

from .exceptions import DictCancelledError

T = TypeVar("T")


class CancellationToken:
    """调用方用来取消进行中请求的信号。"""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason = ""

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled by caller") -> None:
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


async def run_cancellable(work: Awaitable[T], token: Optional[CancellationToken] = None) -> T:
    """等待 work 完成；token 先触发时取消 work 并抛出 DictCancelledError。"""
    if token is not None and token.cancelled:
        if asyncio.iscoroutine(work):
            work.close()
        raise DictCancelledError(token.reason, code="cancelled")

    task = asyncio.ensure_future(work)
    if token is None:
        return await task

    waiter = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    if task.cancelled():
        raise DictCancelledError(token.reason or "cancelled", code="cancelled")
    return task.result()


def truncate_youdao_query(text: str) -> str:
    """有道 v3 签名使用的截断：长度大于 20 时取前 10 个字符 + 长度 + 后 10 个字符。"""
    length = len(text)
    if length <= 20:
        return text
    return f"{text[:10]}{length}{text[length - 10:]}"


def count_letter_i(text: str) -> int:
    return text.count("i")


class PerformanceMetrics:
    """记录各服务的请求耗时。"""

    def __init__(self) -> None:
        self.total_requests = 0
        self.successful_requests = 0
        self.total_duration = 0.0
        self.min_duration = float("inf")
        self.max_duration = 0.0
        self.start_time = time.time()
        self._per_provider: Dict[str, Dict[str, float]] = defaultdict(
            lambda: {"requests": 0, "failures": 0, "total_duration": 0.0, "last_duration": 0.0}
        )

    def record_request(self, duration: float, success: bool, provider: Optional[str] = None) -> None:
        self.total_requests += 1
        if success:
            self.successful_requests += 1
            self.total_duration += duration
            self.min_duration = min(self.min_duration, duration)
            self.max_duration = max(self.max_duration, duration)
        if provider is None:
            return
        stats = self._per_provider[provider]
        stats["requests"] += 1
        stats["last_duration"] = duration
        if success:
            stats["total_duration"] += duration
        else:
            stats["failures"] += 1

    def get_metrics(self) -> Dict[str, Any]:
        uptime = time.time() - self.start_time
        providers = {name: dict(stats) for name, stats in self._per_provider.items()}
        if self.total_requests == 0:
            return {
                "total_requests": 0,
                "successful_requests": 0,
                "success_rate": 0.0,
                "average_duration": 0.0,
                "min_duration": 0.0,
                "max_duration": 0.0,
                "uptime_seconds": uptime,
                "providers": providers,
            }

        average_duration = (
            self.total_duration / self.successful_requests if self.successful_requests else 0.0
        )
        min_duration = 0.0 if self.min_duration == float("inf") else self.min_duration
        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "success_rate": self.successful_requests / self.total_requests,
            "average_duration": average_duration,
            "min_duration": min_duration,
            "max_duration": self.max_duration,
            "uptime_seconds": uptime,
            "providers": providers,
        }

    def reset(self) -> None:
        self.total_requests = 0
        self.successful_requests = 0
        self.total_duration = 0.0
        self.min_duration = float("inf")
        self.max_duration = 0.0
        self.start_time = time.time()
        self._per_provider.clear()
