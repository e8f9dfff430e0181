"""服务适配器基类。"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from ..config import DictConfig
from ..exceptions import DictError, DictLanguageError, DictParseError, DictProviderError
from ..models import ProviderPayload, QueryWordInfo, TranslateTypeResult, TranslationType
from ..resources import HttpReply, SessionManager, send_request
from ..utils import CancellationToken, PerformanceMetrics, run_cancellable

logger = logging.getLogger(__name__)


class BaseProvider:
    """一个服务一个适配器：构造请求 -> 发送 -> 解析 -> 返回统一结果。

    子类实现 `_request`，在里面抛出 Dict*Error；`translate` 负责把异常
    转换成带错误信息的 TranslateTypeResult，不向调用方抛出。
    """

    type: TranslationType

    def __init__(
        self,
        session_manager: SessionManager,
        config: Optional[DictConfig] = None,
        metrics: Optional[PerformanceMetrics] = None,
    ) -> None:
        self.session_manager = session_manager
        self.config = config or DictConfig()
        self.metrics = metrics or PerformanceMetrics()

    def is_available(self) -> bool:
        return self.config.has_credentials(self.type)

    async def translate(
        self,
        query: QueryWordInfo,
        cancel_token: Optional[CancellationToken] = None,
    ) -> TranslateTypeResult:
        start = time.monotonic()
        try:
            payload = await run_cancellable(self._request(query), cancel_token)
        except DictError as exc:
            duration = time.monotonic() - start
            self.metrics.record_request(duration, False, self.type.value)
            logger.error(
                "%s 查询失败 [%s] code: %s, message: %s",
                self.type.value, exc.kind.value, exc.code, exc.message,
            )
            return TranslateTypeResult(
                type=self.type,
                error=exc.to_error_info(self.type),
                cost_ms=int(duration * 1000),
            )

        duration = time.monotonic() - start
        self.metrics.record_request(duration, True, self.type.value)
        logger.info("%s 查询完成, cost: %d ms", self.type.value, int(duration * 1000))
        return TranslateTypeResult(type=self.type, result=payload, cost_ms=int(duration * 1000))

    async def _request(self, query: QueryWordInfo) -> ProviderPayload:
        raise NotImplementedError

    async def _send(self, method: str, url: str, **kwargs: Any) -> HttpReply:
        return await send_request(self.session_manager, method, url, **kwargs)

    def _raise_for_status(self, reply: HttpReply) -> None:
        if not reply.ok:
            raise DictProviderError(reply.reason or f"HTTP {reply.status}", code=str(reply.status))

    def _unsupported(self, query: QueryWordInfo) -> DictLanguageError:
        return DictLanguageError(
            f"{self.type.value} 不支持 {query.from_language} -> {query.to_language}",
            code="unsupported_language",
        )

    def _decode_json(self, reply: HttpReply) -> Any:
        """解析 JSON；解析失败且状态码异常时按服务端拒绝处理。"""
        try:
            return reply.json()
        except DictParseError:
            self._raise_for_status(reply)
            raise
