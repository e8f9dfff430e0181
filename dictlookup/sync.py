"""同步封装。"""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from .config import DictConfig
from .core import DictLookup
from .exceptions import DictError
from .models import DetectedLanguage, LookupResult, TranslationType
from .utils import CancellationToken


class DictLookupSync:
    """DictLookup 的同步适配器，内部持有独立的事件循环。"""

    def __init__(self, config: Optional[DictConfig] = None, **kwargs) -> None:
        self._loop = asyncio.new_event_loop()
        self.lookup_client = DictLookup(config=config, **kwargs)
        self._initialized = False
        self._closed = False

    def _ensure_initialized(self) -> None:
        if self._closed:
            raise DictError("DictLookupSync 已关闭")
        if self._initialized:
            return
        asyncio.set_event_loop(self._loop)
        self._loop.run_until_complete(self.lookup_client.initialize())
        self._initialized = True

    def lookup(
        self,
        text: str,
        from_language: str = "auto",
        to_language: str = "zh-CHS",
        providers: Optional[Iterable[TranslationType]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> LookupResult:
        self._ensure_initialized()
        return self._loop.run_until_complete(
            self.lookup_client.lookup(
                text,
                from_language=from_language,
                to_language=to_language,
                providers=providers,
                cancel_token=cancel_token,
            )
        )

    def detect(self, text: str, remote: bool = False) -> DetectedLanguage:
        self._ensure_initialized()
        return self._loop.run_until_complete(self.lookup_client.detect(text, remote=remote))

    def get_config(self) -> dict:
        return self.lookup_client.get_config()

    def get_metrics(self) -> dict:
        return self.lookup_client.get_metrics()

    def __enter__(self) -> "DictLookupSync":
        self._ensure_initialized()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        try:
            if self._initialized:
                self._loop.run_until_complete(self.lookup_client.cleanup())
        finally:
            self._loop.close()
            self._initialized = False
            self._closed = True

    def __del__(self):  # pragma: no cover - 清理保障
        if not self._loop.is_running():
            self.close()

    @staticmethod
    def quick_lookup(text: str, from_language: str = "auto", to_language: str = "zh-CHS") -> str:
        """返回优先级最高的一条译文。"""
        with DictLookupSync() as client:
            result = client.lookup(text, from_language=from_language, to_language=to_language)
        if not result.sections or not result.sections[0].items:
            raise DictError("没有可用的查询结果")
        return result.sections[0].items[0].title


def create(*args, **kwargs) -> DictLookupSync:
    return DictLookupSync(*args, **kwargs)
