"""网页解析。

谷歌和必应没有使用公开 API，只能从网页里抠数据。抠取逻辑集中在这里，
适配器只调用这几个函数，换解析方式时不需要动请求流程。
"""

from __future__ import annotations

import html
import json
import re
from typing import List, Optional, Tuple
from urllib.parse import unquote

from bs4 import BeautifulSoup
from bs4.element import Tag

from .constants import BING_DEFAULT_IID
from .exceptions import DictParseError
from .models import (
    BingConfig,
    LingueeDictionaryResult,
    LingueeDisplayType,
    LingueeExample,
    LingueeWikipedia,
    LingueeWordExplanation,
    LingueeWordItem,
    QueryWordInfo,
)

GOOGLE_RESULT_PATTERN = re.compile(r'<div[^>]*?class="result-container"[^>]*>[\s\S]*?</div>', re.IGNORECASE)
HTML_TAG_PATTERN = re.compile(r"(</?[^>]+>)", re.IGNORECASE)

BING_IG_PATTERNS = (re.compile(r'IG:"(.*?)"'), re.compile(r'"ig":"(.*?)"', re.IGNORECASE))
BING_IID_PATTERN = re.compile(r'data-iid="(.*?)"')
BING_PARAMS_PATTERN = re.compile(
    r"var params_(?:RichTranslateHelper|AbusePreventionHelper)\s*=\s*(\[.*?\]);", re.DOTALL
)


def extract_google_translation(page: str) -> str:
    """取第一个 result-container 的文本。"""
    match = GOOGLE_RESULT_PATTERN.search(page or "")
    if match is None:
        raise DictParseError("谷歌翻译页面中没有 result-container")
    text = HTML_TAG_PATTERN.sub("", match.group(0))
    return html.unescape(unquote(text))


def parse_bing_config(page: str) -> BingConfig:
    """从必应翻译页面的内联脚本里取 IG、IID、key、token 和有效期。"""
    page = page or ""
    ig = None
    for pattern in BING_IG_PATTERNS:
        match = pattern.search(page)
        if match:
            ig = match.group(1)
            break

    params_match = BING_PARAMS_PATTERN.search(page)
    if not ig or params_match is None:
        raise DictParseError("必应翻译页面中没有找到 IG 或 token")

    try:
        params = json.loads(params_match.group(1))
        key, token, expiration_interval = params[0], params[1], params[2]
    except (json.JSONDecodeError, IndexError, TypeError) as exc:
        raise DictParseError(f"无法解析必应 token 参数: {exc}") from exc

    iid_matches = BING_IID_PATTERN.findall(page)
    translator_iids = [iid for iid in iid_matches if iid.startswith("translator")]
    iid = translator_iids[0] if translator_iids else BING_DEFAULT_IID
    try:
        interval = int(expiration_interval)
    except (TypeError, ValueError) as exc:
        raise DictParseError(f"无效的 token 有效期: {expiration_interval!r}") from exc

    return BingConfig(
        ig=ig,
        iid=iid,
        key=str(key),
        token=str(token),
        expiration_interval=interval,
        count=1,
    )


# ---------- Linguee ----------


def _text(node: Optional[Tag]) -> str:
    if node is None:
        return ""
    return " ".join(node.get_text(" ", strip=True).split())


def _has_class(node: Tag, name: str) -> bool:
    return name in (node.get("class") or [])


def _audio_url(node: Optional[Tag]) -> str:
    if node is None:
        return ""
    audio = node.find("a", class_="audio")
    if audio is None:
        return ""
    match = re.search(r'playSound\(this,\s*"([^"]+)"', audio.get("onclick", ""))
    if match is None:
        return ""
    return f"https://www.linguee.com/mp3/{match.group(1)}.mp3"


def _frequency(translation: Tag, featured: bool) -> Tuple[LingueeDisplayType, str]:
    tag = _text(translation.find("span", class_="tag_c"))
    if "almost always" in tag:
        return LingueeDisplayType.ALMOST_ALWAYS, tag
    if "often used" in tag:
        return LingueeDisplayType.OFTEN_USED, tag
    if tag:
        return LingueeDisplayType.SPECIAL_TAG, tag
    if featured:
        return LingueeDisplayType.COMMON, tag
    return LingueeDisplayType.LESS_COMMON, tag


def _parse_examples(node: Tag) -> Tuple[LingueeExample, ...]:
    examples: List[LingueeExample] = []
    for line in node.select("div.example"):
        source = _text(line.find("span", class_="tag_s"))
        target = _text(line.find("span", class_="tag_t"))
        if source:
            examples.append(LingueeExample(example=source, translation=target))
    return tuple(examples)


def _parse_lemma(lemma: Tag) -> Optional[LingueeWordItem]:
    desc = lemma.find(class_="lemma_desc") or lemma
    word_node = desc.find("a", class_="dictLink")
    word = _text(word_node)
    if not word:
        return None
    pos = _text(desc.find("span", class_="tag_wordtype"))
    placeholder = _text(desc.find("span", class_="placeholder"))

    explanations: List[LingueeWordExplanation] = []
    for translation in lemma.select("div.translation"):
        explanation = _text(translation.find("a", class_="dictLink"))
        if not explanation:
            continue
        featured = _has_class(translation, "featured")
        frequency, tag = _frequency(translation, featured)
        type_node = translation.find("span", class_="tag_type")
        explanations.append(
            LingueeWordExplanation(
                explanation=explanation,
                pos=(type_node.get("title") or _text(type_node)) if type_node else "",
                frequency=frequency,
                featured=featured,
                audio_url=_audio_url(translation),
                tag=tag,
                examples=_parse_examples(translation),
            )
        )

    title = f"{word} {placeholder}".strip()
    return LingueeWordItem(
        word=word,
        title=title,
        featured=_has_class(lemma, "featured"),
        pos=pos,
        placeholder=placeholder,
        audio_url=_audio_url(desc),
        explanation_items=tuple(explanations),
    )


def _parse_lemmas(container: Optional[Tag]) -> Tuple[LingueeWordItem, ...]:
    if container is None:
        return ()
    items = (_parse_lemma(lemma) for lemma in container.select("div.lemma"))
    return tuple(item for item in items if item is not None)


def _parse_sentence_table(soup: BeautifulSoup) -> Tuple[LingueeExample, ...]:
    examples: List[LingueeExample] = []
    for row in soup.select("table.result_table tr, table#result_table tr"):
        left = row.find("td", class_="left")
        right = row.find("td", class_="right2")
        if left is None or right is None:
            continue
        source = _text(left.find("div", class_="wrap") or left)
        target = _text(right.find("div", class_="wrap") or right)
        if source and target:
            examples.append(LingueeExample(example=source, translation=target))
    return tuple(examples)


def _parse_wikipedias(soup: BeautifulSoup) -> Tuple[LingueeWikipedia, ...]:
    wikipedias: List[LingueeWikipedia] = []
    for abstract in soup.select("div.wikipedia div.abstract"):
        title = _text(abstract.find("h2"))
        link = abstract.find("a", href=True)
        source_url = link["href"] if link is not None else ""
        source = _text(link) if link is not None else ""
        body = abstract.find(class_="wiki_text") or abstract.find("p")
        explanation = _text(body)
        if title:
            wikipedias.append(
                LingueeWikipedia(title=title, explanation=explanation, source=source, source_url=source_url)
            )
    return tuple(wikipedias)


def parse_linguee_html(page: str, query_word_info: QueryWordInfo) -> LingueeDictionaryResult:
    if not page or "<" not in page:
        raise DictParseError("Linguee 返回的不是 HTML")
    soup = BeautifulSoup(page, "html.parser")
    return LingueeDictionaryResult(
        query_word_info=query_word_info,
        word_items=_parse_lemmas(soup.find("div", class_="exact")),
        examples=_parse_sentence_table(soup),
        related_words=_parse_lemmas(soup.find("div", class_="inexact")),
        wikipedias=_parse_wikipedias(soup),
    )
