"""Linguee 词典（网页抓取）。"""

from __future__ import annotations

from ..constants import LINGUEE_SEARCH_URL, USER_AGENT
from ..languages import resolve
from ..models import LingueeDictionaryResult, QueryWordInfo, TranslationType
from ..parsers import parse_linguee_html
from .base import BaseProvider


class LingueeProvider(BaseProvider):
    type = TranslationType.LINGUEE

    @staticmethod
    def build_url(query: QueryWordInfo) -> str:
        return LINGUEE_SEARCH_URL.format(
            source=resolve(query.from_language).linguee_name,
            target=resolve(query.to_language).linguee_name,
        )

    async def _request(self, query: QueryWordInfo) -> LingueeDictionaryResult:
        source = resolve(query.from_language).linguee_name
        target = resolve(query.to_language).linguee_name
        if not source or not target or source == target:
            raise self._unsupported(query)

        reply = await self._send(
            "GET",
            self.build_url(query),
            params={"source": "auto", "query": query.word},
            headers={"User-Agent": USER_AGENT},
        )
        self._raise_for_status(reply)
        return parse_linguee_html(reply.text, query)
