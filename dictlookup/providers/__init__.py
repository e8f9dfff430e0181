"""各查询服务的适配器。"""

from __future__ import annotations

from typing import Optional

from ..config import DictConfig
from ..iplocale import IpLocaleResolver
from ..models import TranslationType
from ..resources import SessionManager
from ..storage import LocalStorage
from ..utils import PerformanceMetrics
from .baidu import BaiduProvider
from .base import BaseProvider
from .bing import BingProvider, BingSessionCache
from .caiyun import CaiyunProvider
from .deepl import DeeplProvider
from .google import GoogleProvider
from .linguee import LingueeProvider
from .tencent import TencentProvider
from .youdao import YoudaoProvider

PROVIDER_CLASSES = {
    TranslationType.YOUDAO: YoudaoProvider,
    TranslationType.BAIDU: BaiduProvider,
    TranslationType.TENCENT: TencentProvider,
    TranslationType.CAIYUN: CaiyunProvider,
    TranslationType.GOOGLE: GoogleProvider,
    TranslationType.BING: BingProvider,
    TranslationType.DEEPL: DeeplProvider,
    TranslationType.LINGUEE: LingueeProvider,
}


def create_provider(
    type: TranslationType,
    session_manager: SessionManager,
    config: DictConfig,
    storage: LocalStorage,
    ip_resolver: Optional[IpLocaleResolver] = None,
    metrics: Optional[PerformanceMetrics] = None,
) -> BaseProvider:
    if type == TranslationType.GOOGLE:
        return GoogleProvider(session_manager, config, metrics, ip_resolver=ip_resolver)
    if type == TranslationType.BING:
        session_cache = BingSessionCache(session_manager, storage, ip_resolver=ip_resolver)
        return BingProvider(session_manager, config, metrics, session_cache=session_cache)
    return PROVIDER_CLASSES[type](session_manager, config, metrics)


__all__ = [
    "BaiduProvider",
    "BaseProvider",
    "BingProvider",
    "BingSessionCache",
    "CaiyunProvider",
    "DeeplProvider",
    "GoogleProvider",
    "LingueeProvider",
    "PROVIDER_CLASSES",
    "TencentProvider",
    "YoudaoProvider",
    "create_provider",
]
