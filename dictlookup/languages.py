"""语言代码映射。

以有道语言代码为中心，其它服务的语言代码都由这里的表单向推导。
查不到的语言不会抛异常：能自动检测的服务回退到 auto，其余服务为 None。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class LanguageItem:
    youdao_id: str
    english_name: str
    google_id: Optional[str] = None
    baidu_id: Optional[str] = None
    tencent_id: Optional[str] = None
    caiyun_id: Optional[str] = None
    deepl_id: Optional[str] = None
    microsoft_id: Optional[str] = None
    linguee_name: Optional[str] = None


@dataclass(frozen=True)
class ProviderLanguageIds:
    youdao_id: str
    google_id: Optional[str]
    baidu_id: Optional[str]
    tencent_id: Optional[str]
    caiyun_id: Optional[str]
    deepl_id: Optional[str]
    microsoft_id: Optional[str]
    linguee_name: Optional[str]


AUTO_LANGUAGE = LanguageItem(
    youdao_id="auto",
    english_name="Auto Language",
    google_id="auto",
    baidu_id="auto",
    tencent_id="auto",
    caiyun_id="auto",
    microsoft_id="auto-detect",
)

LANGUAGE_ITEMS: Tuple[LanguageItem, ...] = (
    AUTO_LANGUAGE,
    LanguageItem("zh-CHS", "Chinese-Simplified", "zh-CN", "zh", "zh", "zh", "ZH", "zh-Hans", "chinese"),
    LanguageItem("zh-CHT", "Chinese-Traditional", "zh-TW", "cht", "zh-TW", None, None, "zh-Hant"),
    LanguageItem("en", "English", "en", "en", "en", "en", "EN", "en", "english"),
    LanguageItem("ja", "Japanese", "ja", "jp", "ja", "ja", "JA", "ja", "japanese"),
    LanguageItem("ko", "Korean", "ko", "kor", "ko", None, None, "ko"),
    LanguageItem("fr", "French", "fr", "fra", "fr", None, "FR", "fr", "french"),
    LanguageItem("es", "Spanish", "es", "spa", "es", None, "ES", "es", "spanish"),
    LanguageItem("pt", "Portuguese", "pt", "pt", "pt", None, "PT", "pt", "portuguese"),
    LanguageItem("it", "Italian", "it", "it", "it", None, "IT", "it", "italian"),
    LanguageItem("de", "German", "de", "de", "de", None, "DE", "de", "german"),
    LanguageItem("ru", "Russian", "ru", "ru", "ru", None, "RU", "ru", "russian"),
    LanguageItem("ar", "Arabic", "ar", "ara", "ar", None, None, "ar"),
    LanguageItem("sv", "Swedish", "sv", "swe", None, None, "SV", "sv", "swedish"),
    LanguageItem("nl", "Dutch", "nl", "nl", None, None, "NL", "nl", "dutch"),
    LanguageItem("ro", "Romanian", "ro", "rom", None, None, "RO", "ro", "romanian"),
    LanguageItem("th", "Thai", "th", "th", "th", None, None, "th"),
    LanguageItem("sk", "Slovak", "sk", "slo", None, None, "SK", "sk", "slovak"),
    LanguageItem("hu", "Hungarian", "hu", "hu", None, None, "HU", "hu", "hungarian"),
    LanguageItem("el", "Greek", "el", "el", None, None, "EL", "el", "greek"),
    LanguageItem("da", "Danish", "da", "dan", None, None, "DA", "da", "danish"),
    LanguageItem("fi", "Finnish", "fi", "fin", None, None, "FI", "fi", "finnish"),
    LanguageItem("pl", "Polish", "pl", "pl", None, None, "PL", "pl", "polish"),
    LanguageItem("cs", "Czech", "cs", "cs", None, None, "CS", "cs", "czech"),
    LanguageItem("tr", "Turkish", "tr", "tr", "tr", None, "TR", "tr"),
    LanguageItem("id", "Indonesian", "id", "id", "id", None, "ID", "id"),
    LanguageItem("ms", "Malay", "ms", "may", "ms", None, None, "ms"),
    LanguageItem("vi", "Vietnamese", "vi", "vie", "vi", None, None, "vi"),
    LanguageItem("uk", "Ukrainian", "uk", "ukr", None, None, "UK", "uk"),
    LanguageItem("bg", "Bulgarian", "bg", "bul", None, None, "BG", "bg", "bulgarian"),
    LanguageItem("hi", "Hindi", "hi", "hi", "hi", None, None, "hi"),
)

_ITEMS_BY_YOUDAO_ID: Dict[str, LanguageItem] = {item.youdao_id: item for item in LANGUAGE_ITEMS}

# langdetect / 腾讯语种识别返回的代码 -> 有道代码
DETECTED_CODE_MAP = {
    'zh-cn': 'zh-CHS',
    'zh': 'zh-CHS',
    'zh-tw': 'zh-CHT',
    'zh-hk': 'zh-CHT',
    'jp': 'ja',
    'kor': 'ko',
}

CHINESE_LANGUAGE_IDS = frozenset({"zh-CHS", "zh-CHT"})


def get_language_item(youdao_id: str) -> LanguageItem:
    """根据有道语言代码取语言信息，找不到时返回 auto。"""
    return _ITEMS_BY_YOUDAO_ID.get(youdao_id, AUTO_LANGUAGE)


def is_known_language(youdao_id: str) -> bool:
    return youdao_id in _ITEMS_BY_YOUDAO_ID


def resolve(youdao_id: str) -> ProviderLanguageIds:
    item = get_language_item(youdao_id)
    return ProviderLanguageIds(
        youdao_id=item.youdao_id,
        google_id=item.google_id,
        baidu_id=item.baidu_id,
        tencent_id=item.tencent_id,
        caiyun_id=item.caiyun_id,
        deepl_id=item.deepl_id,
        microsoft_id=item.microsoft_id,
        linguee_name=item.linguee_name,
    )


def youdao_id_from_detected(code: str) -> str:
    """把检测得到的语言代码转回有道代码，无法识别时返回 auto。"""
    if not code:
        return "auto"
    normalized = DETECTED_CODE_MAP.get(code.lower(), code)
    if normalized in _ITEMS_BY_YOUDAO_ID:
        return normalized
    lowered = normalized.lower()
    for item in LANGUAGE_ITEMS:
        if lowered in {item.youdao_id.lower(), (item.google_id or "").lower()}:
            return item.youdao_id
    return "auto"


def is_chinese_language(youdao_id: str) -> bool:
    return youdao_id in CHINESE_LANGUAGE_IDS
