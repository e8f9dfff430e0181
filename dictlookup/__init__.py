"""
DictLookup - 多服务翻译与词典查询库

并发请求有道、百度、腾讯、彩云、Google、Bing、DeepL、Linguee，
并把结果整理成统一的展示区块。提供异步和同步两种接口。
"""

__version__ = "0.3.0"

from .config import DictConfig
from .core import DictLookup
from .sync import DictLookupSync, create
from .models import (
    DetectedLanguage, ErrorKind, ListDisplayItem, LookupRequest, LookupResult,
    QueryWordInfo, SectionDisplayItem, TranslateTypeResult, TranslationType
)
from .exceptions import (
    DictError, DictNetworkError, DictProviderError, DictLanguageError,
    DictParseError, DictCancelledError, DictConfigError, DictValidationError
)
from .utils import CancellationToken

__all__ = [
    'DictLookup',
    'DictLookupSync',
    'DictConfig',
    'create',
    'CancellationToken',
    'DetectedLanguage',
    'ErrorKind',
    'ListDisplayItem',
    'LookupRequest',
    'LookupResult',
    'QueryWordInfo',
    'SectionDisplayItem',
    'TranslateTypeResult',
    'TranslationType',
    'DictError',
    'DictNetworkError',
    'DictProviderError',
    'DictLanguageError',
    'DictParseError',
    'DictCancelledError',
    'DictConfigError',
    'DictValidationError'
]
