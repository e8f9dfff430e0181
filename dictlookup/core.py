"""核心查询模块。"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Union

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

from .config import DictConfig
from .constants import DEFAULT_PERFORMANCE_CONFIG
from .exceptions import DictConfigError, DictError, DictValidationError
from .formatter import PROVIDER_PRIORITY, build_display_sections, priority_of
from .iplocale import IpLocaleResolver
from .languages import is_known_language, youdao_id_from_detected
from .models import DetectedLanguage, LookupRequest, LookupResult, QueryWordInfo, TranslationType
from .providers import BaseProvider, TencentProvider, create_provider
from .resources import SessionManager
from .storage import LocalStorage
from .utils import CancellationToken, PerformanceMetrics

logger = logging.getLogger(__name__)


class DictLookup:
    """聚合多个翻译/词典服务的查询入口。"""

    def __init__(
        self,
        config: Optional[DictConfig] = None,
        storage: Optional[LocalStorage] = None,
        session_manager: Optional[SessionManager] = None,
        **kwargs: object,
    ) -> None:
        self.config = config or DictConfig.from_env()
        self.perf_config: Dict[str, object] = DEFAULT_PERFORMANCE_CONFIG.copy()
        self.perf_config["timeout"] = self.config.timeout
        self.perf_config.update(kwargs)

        self.storage = storage or LocalStorage(self.config.storage_path)
        self.session_manager = session_manager or SessionManager(timeout=float(self.perf_config["timeout"]))
        self.metrics = PerformanceMetrics()
        self.ip_resolver = IpLocaleResolver(
            self.session_manager, self.storage, region=str(self.perf_config["ip_region"])
        )
        self._providers: Dict[TranslationType, BaseProvider] = {}
        self._initialized = False

    async def initialize(self) -> None:
        if self._initialized:
            return
        await self.session_manager.initialize()
        self._initialized = True
        logger.info("DictLookup initialized, config: %s", self.config.summary())

    async def cleanup(self) -> None:
        await self.session_manager.cleanup()
        self._initialized = False

    def get_provider(self, type: TranslationType) -> BaseProvider:
        provider = self._providers.get(type)
        if provider is None:
            provider = create_provider(
                type,
                self.session_manager,
                self.config,
                self.storage,
                ip_resolver=self.ip_resolver,
                metrics=self.metrics,
            )
            self._providers[type] = provider
        return provider

    def available_providers(self) -> List[TranslationType]:
        return [type for type in PROVIDER_PRIORITY if self.config.has_credentials(type)]

    def _select_providers(self, providers: Optional[Iterable[TranslationType]]) -> List[TranslationType]:
        if providers is None:
            return self.available_providers()
        selected = []
        for type in providers:
            type = TranslationType(type)
            if not self.config.has_credentials(type):
                raise DictConfigError(f"{type.value} 缺少凭据配置")
            if type not in selected:
                selected.append(type)
        return selected

    async def lookup(
        self,
        text: Union[str, LookupRequest],
        from_language: str = "auto",
        to_language: str = "zh-CHS",
        providers: Optional[Iterable[TranslationType]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> LookupResult:
        """并发请求各服务，返回原始结果和组装好的展示区块。"""
        request = text if isinstance(text, LookupRequest) else LookupRequest(text, from_language, to_language)
        if not isinstance(request.text, str) or not request.text.strip():
            raise DictValidationError("查询内容不能为空")
        if not is_known_language(request.to_language) or request.to_language == "auto":
            raise DictValidationError(f"不支持的目标语言: {request.to_language}")

        if not self._initialized:
            await self.initialize()

        query = QueryWordInfo(
            word=request.text.strip(),
            from_language=request.from_language,
            to_language=request.to_language,
        )
        selected = self._select_providers(providers)
        logger.info(
            "lookup %r %s -> %s, providers: %s",
            query.word, query.from_language, query.to_language, [t.value for t in selected],
        )

        results = await asyncio.gather(
            *(self.get_provider(type).translate(query, cancel_token) for type in selected)
        )
        results = sorted(results, key=lambda result: priority_of(result.type))
        for result in results:
            if result.error is not None:
                logger.warning(
                    "%s 无结果 [%s]: %s", result.type.value, result.error.kind.value, result.error.message
                )

        return LookupResult(
            query_word_info=query,
            results=results,
            sections=build_display_sections(results, query),
        )

    async def detect(self, text: str, remote: bool = False) -> DetectedLanguage:
        """检测语言。remote 为 True 且配置了腾讯凭据时优先使用腾讯语种识别。"""
        if not text.strip():
            return DetectedLanguage("auto", 0.0)

        if remote and self.config.has_credentials(TranslationType.TENCENT):
            provider = self.get_provider(TranslationType.TENCENT)
            if not isinstance(provider, TencentProvider):
                raise DictConfigError(f"腾讯服务实例类型不正确: {type(provider).__name__}")
            try:
                return await provider.detect_language(text)
            except DictError as exc:
                logger.warning("腾讯语种识别失败, 改用本地检测: %s", exc)

        try:
            DetectorFactory.seed = 0
            langs = detect_langs(text)
        except LangDetectException:
            return self._fallback_detect(text)
        if not langs:
            return self._fallback_detect(text)
        lang = langs[0]
        return DetectedLanguage(youdao_id_from_detected(lang.lang), float(lang.prob))

    def _fallback_detect(self, text: str) -> DetectedLanguage:
        if any("一" <= ch <= "鿿" for ch in text):
            return DetectedLanguage("zh-CHS", 0.9, source="heuristic")
        ascii_ratio = sum(1 for ch in text if ch.isascii()) / max(len(text), 1)
        if ascii_ratio > 0.8:
            return DetectedLanguage("en", 0.9, source="heuristic")
        return DetectedLanguage("auto", 0.0, source="heuristic")

    def get_metrics(self) -> Dict[str, object]:
        return self.metrics.get_metrics()

    def get_config(self) -> Dict[str, object]:
        return {
            **self.config.summary(),
            "performance_config": self.perf_config,
            "providers": [type.value for type in self.available_providers()],
        }

    async def __aenter__(self) -> "DictLookup":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()
