"""把各服务的返回整理成统一的展示结构。"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .constants import DETAILS_SECTION_TITLE, TRANSLATION_SECTION_TITLE
from .models import (
    AccessoryItem,
    BaiduTranslateResult,
    BingTranslateResult,
    CaiyunTranslateResult,
    DeeplTranslateResult,
    DisplayType,
    GoogleTranslateResult,
    LingueeDictionaryResult,
    ListDisplayItem,
    ProviderPayload,
    QueryWordInfo,
    SectionDisplayItem,
    TencentTranslateResult,
    TranslateTypeResult,
    TranslationType,
    YoudaoDictionaryResult,
    YoudaoFormatResult,
)

logger = logging.getLogger(__name__)

# 展示顺序
PROVIDER_PRIORITY: Tuple[TranslationType, ...] = (
    TranslationType.YOUDAO,
    TranslationType.DEEPL,
    TranslationType.GOOGLE,
    TranslationType.BING,
    TranslationType.BAIDU,
    TranslationType.TENCENT,
    TranslationType.CAIYUN,
    TranslationType.LINGUEE,
)


def priority_of(type: TranslationType) -> int:
    return PROVIDER_PRIORITY.index(type)


# ---------- 有道 ----------


def format_youdao_result(
    youdao_result: YoudaoDictionaryResult,
    fallback: Optional[QueryWordInfo] = None,
) -> YoudaoFormatResult:
    """整理有道原始数据。"""
    from_language, _, to_language = youdao_result.language_pair.partition("2")  # from2to
    if not (from_language and to_language) and fallback is not None:
        from_language, to_language = fallback.from_language, fallback.to_language

    # 可能有两个音标 "trænzˈleɪʃn; trænsˈleɪʃn"，取后一个
    us_phonetic = youdao_result.us_phonetic
    if us_phonetic and "; " in us_phonetic:
        us_phonetic = us_phonetic.split("; ")[1] or us_phonetic

    query_word_info = QueryWordInfo(
        word=youdao_result.query or (fallback.word if fallback else ""),
        from_language=from_language,
        to_language=to_language,
        phonetic=us_phonetic or youdao_result.phonetic,
        is_word=youdao_result.is_word,
        exam_types=youdao_result.exam_type,
        speech_url=youdao_result.speak_url,
    )

    web = youdao_result.web
    return YoudaoFormatResult(
        query_word_info=query_word_info,
        translations=youdao_result.translation,
        explanations=youdao_result.explains,
        forms=youdao_result.wfs,
        web_translation=web[0] if web else None,
        web_phrases=web[1:] if web is not None else None,
    )


def is_youdao_dictionary_empty(format_result: YoudaoFormatResult) -> bool:
    return not (
        format_result.explanations
        or format_result.forms
        or format_result.web_phrases
        or format_result.web_translation
    )


def _youdao_translation_item(format_result: YoudaoFormatResult) -> ListDisplayItem:
    info = format_result.query_word_info
    one_line_translation = " ".join(format_result.translations)
    phonetic_text = f"[{info.phonetic}]" if info.phonetic else None
    show_word_subtitle = bool(phonetic_text or info.exam_types)
    return ListDisplayItem(
        display_type=DisplayType.TRANSLATION,
        key=one_line_translation + TranslationType.YOUDAO.value,
        title=one_line_translation,
        subtitle=info.word if show_word_subtitle else None,
        tooltip=DisplayType.TRANSLATION.value,
        copy_text=one_line_translation,
        query_word_info=info,
        provider=TranslationType.YOUDAO,
        accessory_item=AccessoryItem(phonetic=phonetic_text, exam_types=info.exam_types),
    )


def _youdao_detail_sections(format_result: YoudaoFormatResult) -> List[SectionDisplayItem]:
    info = format_result.query_word_info
    sections: List[SectionDisplayItem] = []

    def add(display_type: DisplayType, item: ListDisplayItem) -> None:
        # 只有第一个详情区块带标题
        title = DETAILS_SECTION_TITLE if not sections else None
        sections.append(SectionDisplayItem(type=display_type.value, items=(item,), section_title=title))

    for index, explanation in enumerate(format_result.explanations or ()):
        add(
            DisplayType.EXPLANATIONS,
            ListDisplayItem(
                display_type=DisplayType.EXPLANATIONS,
                key=f"{explanation}{index}",
                title=explanation,
                tooltip=DisplayType.EXPLANATIONS.value,
                copy_text=explanation,
                query_word_info=info,
                provider=TranslationType.YOUDAO,
            ),
        )

    # [ 复数 goods   比较级 better   最高级 best ]
    forms_text = "   ".join(f"{form.name} {form.value}" for form in format_result.forms or ())
    if forms_text:
        add(
            DisplayType.FORMS,
            ListDisplayItem(
                display_type=DisplayType.FORMS,
                key=forms_text,
                title="",
                subtitle=f"[ {forms_text} ]",
                tooltip=DisplayType.FORMS.value,
                copy_text=forms_text,
                query_word_info=info,
                provider=TranslationType.YOUDAO,
            ),
        )

    web_translation = format_result.web_translation
    if web_translation:
        value = "；".join(web_translation.value)
        copy_text = f"{web_translation.key} {value}"
        add(
            DisplayType.WEB_TRANSLATION,
            ListDisplayItem(
                display_type=DisplayType.WEB_TRANSLATION,
                key=copy_text,
                title=web_translation.key,
                subtitle=value,
                tooltip=DisplayType.WEB_TRANSLATION.value,
                copy_text=copy_text,
                query_word_info=info,
                provider=TranslationType.YOUDAO,
            ),
        )

    for index, phrase in enumerate(format_result.web_phrases or ()):
        value = "；".join(phrase.value)
        copy_text = f"{phrase.key} {value}"
        add(
            DisplayType.WEB_PHRASE,
            ListDisplayItem(
                display_type=DisplayType.WEB_PHRASE,
                key=f"{copy_text}{index}",
                title=phrase.key,
                subtitle=value,
                tooltip=DisplayType.WEB_PHRASE.value,
                copy_text=copy_text,
                query_word_info=info,
                provider=TranslationType.YOUDAO,
            ),
        )

    return sections


def update_youdao_display(format_result: Optional[YoudaoFormatResult]) -> List[SectionDisplayItem]:
    """只有有道一家时的展示：翻译 + 详情。"""
    if format_result is None:
        return []
    sections = [
        SectionDisplayItem(
            type=TranslationType.YOUDAO.value,
            items=(_youdao_translation_item(format_result),),
            section_title=TranslationType.YOUDAO.value,
        )
    ]
    sections.extend(_youdao_detail_sections(format_result))
    return sections


# ---------- Linguee ----------


def update_linguee_display(result: Optional[LingueeDictionaryResult]) -> List[SectionDisplayItem]:
    if result is None or result.is_empty():
        return []
    info = result.query_word_info
    sections: List[SectionDisplayItem] = []

    for word_item in result.word_items:
        items = tuple(
            ListDisplayItem(
                display_type=DisplayType.LINGUEE_WORD,
                key=f"{word_item.word}{explanation.explanation}{index}",
                title=explanation.explanation,
                subtitle=explanation.pos or None,
                tooltip=explanation.frequency.value,
                copy_text=explanation.explanation,
                query_word_info=info,
                provider=TranslationType.LINGUEE,
            )
            for index, explanation in enumerate(word_item.explanation_items)
        )
        if items:
            title = f"{word_item.title} {word_item.pos}".strip()
            sections.append(SectionDisplayItem(type=TranslationType.LINGUEE.value, items=items, section_title=title))

    if result.examples:
        sections.append(
            SectionDisplayItem(
                type=DisplayType.LINGUEE_EXAMPLE.value,
                section_title="Examples",
                items=tuple(
                    ListDisplayItem(
                        display_type=DisplayType.LINGUEE_EXAMPLE,
                        key=f"{example.example}{index}",
                        title=example.example,
                        subtitle=example.translation,
                        tooltip=DisplayType.LINGUEE_EXAMPLE.value,
                        copy_text=f"{example.example} {example.translation}",
                        query_word_info=info,
                        provider=TranslationType.LINGUEE,
                    )
                    for index, example in enumerate(result.examples)
                ),
            )
        )

    if result.related_words:
        sections.append(
            SectionDisplayItem(
                type=DisplayType.LINGUEE_RELATED_WORD.value,
                section_title="Related words",
                items=tuple(
                    ListDisplayItem(
                        display_type=DisplayType.LINGUEE_RELATED_WORD,
                        key=f"{word.word}{index}",
                        title=word.word,
                        subtitle="; ".join(e.explanation for e in word.explanation_items) or None,
                        tooltip=DisplayType.LINGUEE_RELATED_WORD.value,
                        copy_text=word.word,
                        query_word_info=info,
                        provider=TranslationType.LINGUEE,
                    )
                    for index, word in enumerate(result.related_words)
                ),
            )
        )

    if result.wikipedias:
        sections.append(
            SectionDisplayItem(
                type=DisplayType.LINGUEE_WIKIPEDIA.value,
                section_title="Wikipedia",
                items=tuple(
                    ListDisplayItem(
                        display_type=DisplayType.LINGUEE_WIKIPEDIA,
                        key=f"{wiki.title}{index}",
                        title=wiki.title,
                        subtitle=wiki.explanation or None,
                        tooltip=wiki.source or DisplayType.LINGUEE_WIKIPEDIA.value,
                        copy_text=f"{wiki.title} {wiki.explanation}".strip(),
                        query_word_info=info,
                        provider=TranslationType.LINGUEE,
                    )
                    for index, wiki in enumerate(result.wikipedias)
                ),
            )
        )

    return sections


# ---------- 汇总 ----------


def one_line_translation(payload: ProviderPayload) -> str:
    if isinstance(payload, YoudaoDictionaryResult):
        text = " ".join(payload.translation)
    elif isinstance(payload, BaiduTranslateResult):
        text = "\n".join(item.dst for item in payload.trans_result)
    elif isinstance(payload, TencentTranslateResult):
        text = payload.target_text
    elif isinstance(payload, CaiyunTranslateResult):
        text = "\n".join(payload.target)
    elif isinstance(payload, (GoogleTranslateResult, BingTranslateResult, DeeplTranslateResult)):
        text = payload.translated_text
    else:
        # Linguee 只有词典内容
        text = ""
    return text.strip()


def _translation_item(
    result: TranslateTypeResult,
    query_word_info: QueryWordInfo,
) -> Optional[ListDisplayItem]:
    text = one_line_translation(result.result)
    if not text:
        return None
    return ListDisplayItem(
        display_type=DisplayType.TRANSLATION,
        key=text + result.type.value,
        title=text,
        tooltip=result.type.value,
        copy_text=text,
        query_word_info=query_word_info,
        provider=result.type,
    )


def build_display_sections(
    results: Iterable[TranslateTypeResult],
    query_word_info: QueryWordInfo,
) -> List[SectionDisplayItem]:
    """按固定顺序组装展示区块。

    第一个区块是各家的一行翻译；之后是有道详情和 Linguee 词典内容。
    出错或为空的服务直接略过，不影响其它服务。
    """
    successes = sorted(
        (result for result in results if result.ok),
        key=lambda result: priority_of(result.type),
    )

    youdao_format: Optional[YoudaoFormatResult] = None
    linguee_result: Optional[LingueeDictionaryResult] = None
    translation_items: List[ListDisplayItem] = []
    for result in successes:
        payload = result.result
        if isinstance(payload, YoudaoDictionaryResult):
            if youdao_format is not None:
                continue
            youdao_format = format_youdao_result(payload, fallback=query_word_info)
            translation_items.append(_youdao_translation_item(youdao_format))
            continue
        if isinstance(payload, LingueeDictionaryResult):
            linguee_result = linguee_result or payload
            continue
        item = _translation_item(result, query_word_info)
        if item is not None and all(existing.provider != item.provider for existing in translation_items):
            translation_items.append(item)

    sections: List[SectionDisplayItem] = []
    if translation_items:
        sections.append(
            SectionDisplayItem(
                type=DisplayType.TRANSLATION.value,
                items=tuple(translation_items),
                section_title=TRANSLATION_SECTION_TITLE,
            )
        )
    if youdao_format is not None and not is_youdao_dictionary_empty(youdao_format):
        sections.extend(_youdao_detail_sections(youdao_format))
    sections.extend(update_linguee_display(linguee_result))

    logger.debug("组装展示区块 %d 个, 来自 %d 个成功结果", len(sections), len(successes))
    return sections
