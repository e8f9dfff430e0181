"""数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class TranslationType(str, Enum):
    """查询服务类型。"""

    YOUDAO = "Youdao"
    BAIDU = "Baidu"
    TENCENT = "Tencent"
    CAIYUN = "Caiyun"
    GOOGLE = "Google"
    BING = "Bing"
    DEEPL = "DeepL"
    LINGUEE = "Linguee"


class ErrorKind(str, Enum):
    NETWORK_FAILURE = "NetworkFailure"
    PROVIDER_REJECTED = "ProviderRejected"
    UNSUPPORTED_LANGUAGE_PAIR = "UnsupportedLanguagePair"
    PARSE_FAILURE = "ParseFailure"
    CANCELLED = "Cancelled"


class DisplayType(str, Enum):
    """列表项的展示类型。"""

    TRANSLATION = "Translate"
    EXPLANATIONS = "Explanation"
    FORMS = "Forms and Tenses"
    WEB_TRANSLATION = "Web Translation"
    WEB_PHRASE = "Web Phrase"
    LINGUEE_WORD = "Linguee Word"
    LINGUEE_EXAMPLE = "Example"
    LINGUEE_RELATED_WORD = "Related Word"
    LINGUEE_WIKIPEDIA = "Wikipedia"


class LingueeDisplayType(str, Enum):
    ALMOST_ALWAYS = "almost always used"
    OFTEN_USED = "often used"
    COMMON = "common"
    LESS_COMMON = "less common"
    SPECIAL_TAG = "special tag"
    UNFEATURED = "unfeatured"
    EXAMPLE = "example"
    RELATED_WORD = "related word"
    WIKIPEDIA = "wikipedia"


@dataclass(frozen=True)
class LookupRequest:
    """外部传入的查询请求，语言使用有道语言代码。"""

    text: str
    from_language: str = "auto"
    to_language: str = "zh-CHS"


@dataclass(frozen=True)
class QueryWordInfo:
    """一次查询的规范化信息，创建后不再修改。"""

    word: str
    from_language: str
    to_language: str
    phonetic: Optional[str] = None
    is_word: Optional[bool] = None
    exam_types: Tuple[str, ...] = ()
    speech_url: Optional[str] = None


@dataclass(frozen=True)
class RequestErrorInfo:
    type: TranslationType
    code: str
    message: str
    kind: ErrorKind = ErrorKind.PROVIDER_REJECTED


# ---------- 有道 ----------


@dataclass(frozen=True)
class YoudaoWebItem:
    key: str
    value: Tuple[str, ...]


@dataclass(frozen=True)
class YoudaoWordForm:
    name: str
    value: str


@dataclass(frozen=True)
class YoudaoDictionaryResult:
    """有道接口原始返回（只保留用到的字段）。"""

    query: str
    language_pair: str  # 接口字段 l, 形如 en2zh-CHS
    translation: Tuple[str, ...]
    error_code: str = "0"
    is_word: Optional[bool] = None
    speak_url: Optional[str] = None
    phonetic: Optional[str] = None
    us_phonetic: Optional[str] = None
    explains: Optional[Tuple[str, ...]] = None
    exam_type: Tuple[str, ...] = ()
    wfs: Optional[Tuple[YoudaoWordForm, ...]] = None
    web: Optional[Tuple[YoudaoWebItem, ...]] = None


@dataclass(frozen=True)
class YoudaoFormatResult:
    query_word_info: QueryWordInfo
    translations: Tuple[str, ...]
    explanations: Optional[Tuple[str, ...]] = None
    forms: Optional[Tuple[YoudaoWordForm, ...]] = None
    web_translation: Optional[YoudaoWebItem] = None
    web_phrases: Optional[Tuple[YoudaoWebItem, ...]] = None


# ---------- 纯翻译服务 ----------


@dataclass(frozen=True)
class BaiduTranslateItem:
    src: str
    dst: str


@dataclass(frozen=True)
class BaiduTranslateResult:
    from_language: str
    to_language: str
    trans_result: Tuple[BaiduTranslateItem, ...]


@dataclass(frozen=True)
class TencentTranslateResult:
    target_text: str
    source: str
    target: str
    request_id: str = ""


@dataclass(frozen=True)
class CaiyunTranslateResult:
    target: Tuple[str, ...]
    confidence: Optional[float] = None
    rc: int = 0


@dataclass(frozen=True)
class GoogleTranslateResult:
    translated_text: str
    tld: str = "com"


@dataclass(frozen=True)
class BingTranslateResult:
    translated_text: str
    to_language: str
    detected_language: Optional[str] = None
    detected_score: Optional[float] = None


@dataclass(frozen=True)
class DeeplTranslateResult:
    translated_text: str
    detected_language: Optional[str] = None
    alternatives: Tuple[str, ...] = ()


@dataclass
class BingConfig:
    """必应网页翻译的会话信息，token 有效期内复用。"""

    ig: str  # F4D70DC299D549CE824BFCD7506749E7
    iid: str  # translator.5023
    key: str  # token 签发时间戳(ms)
    token: str
    expiration_interval: int  # ms
    count: int = 1  # 当前 token 已请求次数

    def is_expired(self, now_ms: int) -> bool:
        try:
            issued_at = int(self.key)
        except ValueError:
            return True
        return now_ms - issued_at > self.expiration_interval

    def to_dict(self) -> Dict[str, object]:
        return {
            "IG": self.ig,
            "IID": self.iid,
            "key": self.key,
            "token": self.token,
            "expirationInterval": self.expiration_interval,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "BingConfig":
        return cls(
            ig=str(data["IG"]),
            iid=str(data["IID"]),
            key=str(data["key"]),
            token=str(data["token"]),
            expiration_interval=int(data["expirationInterval"]),
            count=int(data.get("count", 1)),
        )


# ---------- Linguee ----------


@dataclass(frozen=True)
class LingueeExample:
    example: str
    translation: str
    pos: str = ""


@dataclass(frozen=True)
class LingueeWordExplanation:
    explanation: str
    pos: str
    frequency: LingueeDisplayType
    featured: bool = False
    audio_url: str = ""
    tag: str = ""
    examples: Tuple[LingueeExample, ...] = ()


@dataclass(frozen=True)
class LingueeWordItem:
    word: str
    title: str
    featured: bool
    pos: str
    placeholder: str = ""
    audio_url: str = ""
    explanation_items: Tuple[LingueeWordExplanation, ...] = ()


@dataclass(frozen=True)
class LingueeWikipedia:
    title: str
    explanation: str
    source: str
    source_url: str


@dataclass(frozen=True)
class LingueeDictionaryResult:
    query_word_info: QueryWordInfo
    word_items: Tuple[LingueeWordItem, ...] = ()
    examples: Tuple[LingueeExample, ...] = ()
    related_words: Tuple[LingueeWordItem, ...] = ()
    wikipedias: Tuple[LingueeWikipedia, ...] = ()

    def is_empty(self) -> bool:
        return not (self.word_items or self.examples or self.related_words or self.wikipedias)


ProviderPayload = Union[
    YoudaoDictionaryResult,
    BaiduTranslateResult,
    TencentTranslateResult,
    CaiyunTranslateResult,
    GoogleTranslateResult,
    BingTranslateResult,
    DeeplTranslateResult,
    LingueeDictionaryResult,
]

PAYLOAD_TYPES: Dict[TranslationType, type] = {
    TranslationType.YOUDAO: YoudaoDictionaryResult,
    TranslationType.BAIDU: BaiduTranslateResult,
    TranslationType.TENCENT: TencentTranslateResult,
    TranslationType.CAIYUN: CaiyunTranslateResult,
    TranslationType.GOOGLE: GoogleTranslateResult,
    TranslationType.BING: BingTranslateResult,
    TranslationType.DEEPL: DeeplTranslateResult,
    TranslationType.LINGUEE: LingueeDictionaryResult,
}


@dataclass(frozen=True)
class TranslateTypeResult:
    """单个服务的查询结果：要么有 result，要么有 error。"""

    type: TranslationType
    result: Optional[ProviderPayload] = None
    error: Optional[RequestErrorInfo] = None
    cost_ms: int = 0

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("TranslateTypeResult 需要且只能包含 result 或 error 之一")
        if self.result is not None and not isinstance(self.result, PAYLOAD_TYPES[self.type]):
            raise TypeError(
                f"{self.type.value} 的结果类型应为 {PAYLOAD_TYPES[self.type].__name__}, "
                f"实际为 {type(self.result).__name__}"
            )

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------- 展示模型 ----------


@dataclass(frozen=True)
class AccessoryItem:
    phonetic: Optional[str] = None
    exam_types: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ListDisplayItem:
    display_type: DisplayType
    key: str
    title: str
    tooltip: str
    copy_text: str
    query_word_info: QueryWordInfo
    subtitle: Optional[str] = None
    provider: Optional[TranslationType] = None
    accessory_item: Optional[AccessoryItem] = None


@dataclass(frozen=True)
class SectionDisplayItem:
    type: str
    items: Tuple[ListDisplayItem, ...]
    section_title: Optional[str] = None


@dataclass
class LookupResult:
    """一次查询的汇总结果。"""

    query_word_info: QueryWordInfo
    results: List[TranslateTypeResult] = field(default_factory=list)
    sections: List[SectionDisplayItem] = field(default_factory=list)

    @property
    def errors(self) -> List[RequestErrorInfo]:
        return [r.error for r in self.results if r.error is not None]

    def get(self, type: TranslationType) -> Optional[TranslateTypeResult]:
        for result in self.results:
            if result.type == type:
                return result
        return None


@dataclass
class DetectedLanguage:
    """语言检测结果。"""

    youdao_language_id: str
    confidence: float
    source: str = "langdetect"

    def __repr__(self) -> str:  # pragma: no cover - 调试辅助
        return (
            f"<DetectedLanguage lang={self.youdao_language_id!r} "
            f"confidence={self.confidence:.3f} source={self.source!r}>"
        )


__all__ = [
    "AccessoryItem",
    "BaiduTranslateItem",
    "BaiduTranslateResult",
    "BingConfig",
    "BingTranslateResult",
    "CaiyunTranslateResult",
    "DeeplTranslateResult",
    "DetectedLanguage",
    "DisplayType",
    "ErrorKind",
    "GoogleTranslateResult",
    "LingueeDictionaryResult",
    "LingueeDisplayType",
    "LingueeExample",
    "LingueeWikipedia",
    "LingueeWordExplanation",
    "LingueeWordItem",
    "ListDisplayItem",
    "LookupRequest",
    "LookupResult",
    "PAYLOAD_TYPES",
    "ProviderPayload",
    "QueryWordInfo",
    "RequestErrorInfo",
    "SectionDisplayItem",
    "TencentTranslateResult",
    "TranslateTypeResult",
    "TranslationType",
    "YoudaoDictionaryResult",
    "YoudaoFormatResult",
    "YoudaoWebItem",
    "YoudaoWordForm",
]
