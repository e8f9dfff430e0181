"""百度翻译API

Docs: https://fanyi-api.baidu.com/doc/21
"""

from __future__ import annotations

import hashlib
import time
from typing import Any, Dict

from ..constants import BAIDU_API_URL
from ..exceptions import DictParseError, DictProviderError
from ..languages import resolve
from ..models import BaiduTranslateItem, BaiduTranslateResult, QueryWordInfo, TranslationType
from .base import BaseProvider


def build_baidu_sign(app_id: str, text: str, salt: str, app_secret: str) -> str:
    content = f"{app_id}{text}{salt}{app_secret}"
    return hashlib.md5(content.encode("utf-8")).hexdigest()


def parse_baidu_result(data: Any) -> BaiduTranslateResult:
    if not isinstance(data, dict):
        raise DictParseError("百度返回的不是 JSON 对象")
    if "error_code" in data and str(data["error_code"]) != "52000":
        raise DictProviderError(str(data.get("error_msg", "")), code=str(data["error_code"]))

    trans_result = data.get("trans_result")
    if not isinstance(trans_result, list) or not trans_result:
        raise DictParseError("百度返回中缺少 trans_result")
    items = []
    for item in trans_result:
        if not isinstance(item, dict) or "dst" not in item:
            raise DictParseError("百度返回的 trans_result 结构不正确")
        items.append(BaiduTranslateItem(src=str(item.get("src", "")), dst=str(item["dst"])))
    return BaiduTranslateResult(
        from_language=str(data.get("from", "")),
        to_language=str(data.get("to", "")),
        trans_result=tuple(items),
    )


class BaiduProvider(BaseProvider):
    type = TranslationType.BAIDU

    def __init__(self, *args, clock=time.time, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._clock = clock

    def build_params(self, query: QueryWordInfo) -> Dict[str, str]:
        from_id = resolve(query.from_language).baidu_id or "auto"
        to_id = resolve(query.to_language).baidu_id
        if not to_id or to_id == "auto":
            raise self._unsupported(query)

        salt = str(round(self._clock()))
        sign = build_baidu_sign(self.config.baidu_app_id, query.word, salt, self.config.baidu_app_secret)
        return {
            "q": query.word,
            "from": from_id,
            "to": to_id,
            "appid": self.config.baidu_app_id,
            "salt": salt,
            "sign": sign,
        }

    async def _request(self, query: QueryWordInfo) -> BaiduTranslateResult:
        reply = await self._send("GET", BAIDU_API_URL, params=self.build_params(query))
        # 百度出错时同样返回 200，错误码在 error_code 里
        return parse_baidu_result(self._decode_json(reply))
