"""资源管理模块"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

from .constants import DEFAULT_TIMEOUT
from .exceptions import DictNetworkError, DictParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpReply:
    """已读完的 HTTP 响应。"""

    status: int
    reason: str
    text: str
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        try:
            return json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise DictParseError(f"无法解析 JSON: {exc}") from exc


class SessionManager:
    """管理异步HTTP会话"""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[aiohttp.ClientSession] = None):
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def initialize(self):
        """初始化会话"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
            self._owns_session = True

    async def get_session(self) -> aiohttp.ClientSession:
        """获取会话实例"""
        if self._session is None or self._session.closed:
            await self.initialize()
        return self._session

    async def cleanup(self):
        """清理会话资源"""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None


async def send_request(session_manager: SessionManager, method: str, url: str, **kwargs: Any) -> HttpReply:
    """发送请求并读完响应体，传输层错误统一转成 DictNetworkError。"""
    session = await session_manager.get_session()
    start = time.monotonic()
    try:
        async with session.request(method, url, **kwargs) as response:
            text = await response.text()
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.debug("%s %s -> %s, cost: %d ms", method, url, response.status, elapsed_ms)
            return HttpReply(response.status, response.reason or "", text, elapsed_ms)
    except asyncio.TimeoutError as exc:
        raise DictNetworkError(f"请求超时: {url}", code="timeout") from exc
    except aiohttp.ClientError as exc:
        raise DictNetworkError(f"请求失败: {exc}", code=type(exc).__name__) from exc
