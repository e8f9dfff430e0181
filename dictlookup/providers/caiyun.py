"""彩云小译

Docs: https://open.caiyunapp.com/%E4%BA%94%E5%88%86%E9%92%9F%E5%AD%A6%E4%BC%9A%E5%BD%A9%E4%BA%91%E5%B0%8F%E8%AF%91_API
"""

from __future__ import annotations

from typing import Any, Dict

from ..constants import CAIYUN_API_URL, CAIYUN_SUPPORTED_TRANS_TYPES
from ..exceptions import DictParseError
from ..languages import resolve
from ..models import CaiyunTranslateResult, QueryWordInfo, TranslationType
from .base import BaseProvider


def caiyun_trans_type(from_language: str, to_language: str) -> str:
    source = resolve(from_language).caiyun_id or "auto"
    target = resolve(to_language).caiyun_id
    return f"{source}2{target}"


class CaiyunProvider(BaseProvider):
    type = TranslationType.CAIYUN

    def build_payload(self, query: QueryWordInfo) -> Dict[str, Any]:
        trans_type = caiyun_trans_type(query.from_language, query.to_language)
        if trans_type not in CAIYUN_SUPPORTED_TRANS_TYPES:
            raise self._unsupported(query)
        return {
            # source 为数组时服务端会并行翻译每一段
            "source": query.word.split("\n"),
            "trans_type": trans_type,
            "detect": trans_type.startswith("auto2"),
        }

    async def _request(self, query: QueryWordInfo) -> CaiyunTranslateResult:
        payload = self.build_payload(query)
        headers = {
            "content-type": "application/json",
            "x-authorization": f"token {self.config.caiyun_token}",
        }
        reply = await self._send("POST", CAIYUN_API_URL, json=payload, headers=headers)
        self._raise_for_status(reply)
        data = reply.json()

        target = data.get("target") if isinstance(data, dict) else None
        if not isinstance(target, list) or not all(isinstance(item, str) for item in target):
            raise DictParseError("彩云返回中缺少 target")
        confidence = data.get("confidence")
        try:
            rc = int(data.get("rc", 0) or 0)
        except (TypeError, ValueError) as exc:
            raise DictParseError(f"彩云返回的 rc 不是整数: {data.get('rc')!r}") from exc
        return CaiyunTranslateResult(
            target=tuple(target),
            confidence=float(confidence) if isinstance(confidence, (int, float)) else None,
            rc=rc,
        )
