"""有道智云文本翻译（词典）。

Docs: https://ai.youdao.com/DOCSIRMA/html/自然语言翻译/API文档/文本翻译服务/文本翻译服务-API文档.html
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from ..constants import YOUDAO_API_URL, YOUDAO_ERROR_MESSAGES
from ..exceptions import DictParseError, DictProviderError
from ..languages import resolve
from ..models import (
    QueryWordInfo,
    TranslationType,
    YoudaoDictionaryResult,
    YoudaoWebItem,
    YoudaoWordForm,
)
from ..utils import truncate_youdao_query
from .base import BaseProvider

logger = logging.getLogger(__name__)


def build_youdao_sign(app_id: str, text: str, salt: str, timestamp: str, app_secret: str) -> str:
    content = f"{app_id}{truncate_youdao_query(text)}{salt}{timestamp}{app_secret}"
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def _string_tuple(value: Any, field: str) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise DictParseError(f"有道返回的 {field} 不是字符串列表")
    return tuple(value)


def parse_youdao_result(data: Any) -> YoudaoDictionaryResult:
    """校验并转换有道返回的 JSON。errorCode 非 0 时抛出 DictProviderError。"""
    if not isinstance(data, dict):
        raise DictParseError("有道返回的不是 JSON 对象")

    error_code = str(data.get("errorCode", ""))
    if error_code != "0":
        message = YOUDAO_ERROR_MESSAGES.get(error_code, f"Youdao error {error_code}")
        raise DictProviderError(message, code=error_code)

    translation = _string_tuple(data.get("translation"), "translation")
    if not translation:
        raise DictParseError("有道返回中缺少 translation")

    basic = data.get("basic") or {}
    if not isinstance(basic, dict):
        raise DictParseError("有道返回的 basic 不是对象")

    wfs: Optional[List[YoudaoWordForm]] = None
    if basic.get("wfs") is not None:
        if not isinstance(basic["wfs"], list):
            raise DictParseError("有道返回的 wfs 不是列表")
        wfs = []
        for item in basic["wfs"]:
            wf = item.get("wf") if isinstance(item, dict) else None
            if not isinstance(wf, dict):
                raise DictParseError("有道返回的 wfs 结构不正确")
            wfs.append(YoudaoWordForm(name=str(wf.get("name", "")), value=str(wf.get("value", ""))))

    web: Optional[List[YoudaoWebItem]] = None
    if data.get("web") is not None:
        if not isinstance(data["web"], list):
            raise DictParseError("有道返回的 web 不是列表")
        web = []
        for item in data["web"]:
            if not isinstance(item, dict) or "key" not in item:
                raise DictParseError("有道返回的 web 结构不正确")
            web.append(YoudaoWebItem(key=str(item["key"]), value=_string_tuple(item.get("value"), "web.value") or ()))

    return YoudaoDictionaryResult(
        query=str(data.get("query", "")),
        language_pair=str(data.get("l", "")),
        translation=translation,
        error_code=error_code,
        is_word=data.get("isWord"),
        speak_url=data.get("speakUrl"),
        phonetic=basic.get("phonetic"),
        us_phonetic=basic.get("us-phonetic"),
        explains=_string_tuple(basic.get("explains"), "explains"),
        exam_type=_string_tuple(basic.get("exam_type"), "exam_type") or (),
        wfs=tuple(wfs) if wfs is not None else None,
        web=tuple(web) if web is not None else None,
    )


class YoudaoProvider(BaseProvider):
    type = TranslationType.YOUDAO

    def __init__(self, *args, clock=time.time, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._clock = clock

    def build_params(self, query: QueryWordInfo) -> Dict[str, str]:
        timestamp = str(round(self._clock()))
        salt = timestamp
        sign = build_youdao_sign(
            self.config.youdao_app_id, query.word, salt, timestamp, self.config.youdao_app_secret
        )
        return {
            "sign": sign,
            "salt": salt,
            "from": resolve(query.from_language).youdao_id,
            "signType": "v3",
            "q": query.word,
            "appKey": self.config.youdao_app_id,
            "curtime": timestamp,
            "to": resolve(query.to_language).youdao_id,
        }

    async def _request(self, query: QueryWordInfo) -> YoudaoDictionaryResult:
        reply = await self._send("POST", YOUDAO_API_URL, data=self.build_params(query))
        # 有道出错时也返回 200，只能看 errorCode
        result = parse_youdao_result(self._decode_json(reply))
        logger.debug("youdao l: %s, isWord: %s", result.language_pair, result.is_word)
        return result
