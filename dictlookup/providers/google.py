"""谷歌翻译（移动网页版抓取）。"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ..constants import GOOGLE_WEB_URL, USER_AGENT
from ..iplocale import IpLocaleResolver
from ..languages import get_language_item, is_chinese_language
from ..models import GoogleTranslateResult, QueryWordInfo, TranslationType
from ..parsers import extract_google_translation
from .base import BaseProvider

logger = logging.getLogger(__name__)


class GoogleProvider(BaseProvider):
    type = TranslationType.GOOGLE

    def __init__(self, *args, ip_resolver: Optional[IpLocaleResolver] = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.ip_resolver = ip_resolver

    def _prefers_chinese(self) -> bool:
        return any(is_chinese_language(lang) for lang in self.config.preferred_languages)

    async def resolve_tld(self) -> str:
        """首选语言包含中文或 IP 在国内时用 cn，否则用 com。"""
        if self._prefers_chinese():
            return "cn"
        if self.ip_resolver is not None and await self.ip_resolver.is_in_region():
            return "cn"
        return "com"

    @staticmethod
    def build_params(query: QueryWordInfo) -> Dict[str, str]:
        from_item = get_language_item(query.from_language)
        to_item = get_language_item(query.to_language)
        from_id = from_item.google_id or from_item.youdao_id
        to_id = to_item.google_id or to_item.youdao_id
        return {
            "sl": from_id,
            "tl": to_id,
            "hl": to_id,
            "q": query.word,
        }

    async def _request(self, query: QueryWordInfo) -> GoogleTranslateResult:
        params = self.build_params(query)
        if params["tl"] == "auto":
            raise self._unsupported(query)
        tld = await self.resolve_tld()
        reply = await self._send(
            "GET",
            GOOGLE_WEB_URL.format(tld=tld),
            params=params,
            headers={"User-Agent": USER_AGENT},
        )
        self._raise_for_status(reply)
        translation = extract_google_translation(reply.text)
        logger.debug("google result: %s, tld: %s", translation, tld)
        return GoogleTranslateResult(translated_text=translation, tld=tld)
