"""DeepL 网页版 JSON-RPC（模拟浏览器客户端）。

服务端会校验两处细节：
1. timestamp 必须是 (文本中字母 i 的数量 + 1) 的整数倍；
2. 请求体里 "method" 后面的空格写法由请求 id 决定，校验的是原始字节，
   所以请求体只能手工拼好后原样发送，不能再交给 JSON 序列化。
"""

from __future__ import annotations

import json
import random
import time
from typing import Any, Dict, Optional

from ..constants import DEEPL_JSONRPC_URL, DEEPL_METHOD, USER_AGENT
from ..exceptions import DictParseError, DictProviderError
from ..languages import resolve
from ..models import DeeplTranslateResult, QueryWordInfo, TranslationType
from ..utils import count_letter_i
from .base import BaseProvider


def gen_fake_timestamp(text: str, now_ms: int) -> int:
    i_count = count_letter_i(text) + 1
    return now_ms - now_ms % i_count


def method_spacing(request_id: int) -> str:
    if (request_id + 3) % 13 == 0 or (request_id + 5) % 29 == 0:
        return '"method" : "'
    return '"method": "'


def gen_fake_method_body(payload: Dict[str, Any], request_id: int) -> str:
    body = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return body.replace('"method":"', method_spacing(request_id), 1)


def parse_deepl_result(data: Any) -> DeeplTranslateResult:
    if not isinstance(data, dict):
        raise DictParseError("DeepL 返回的不是 JSON 对象")
    error = data.get("error")
    if isinstance(error, dict):
        raise DictProviderError(str(error.get("message", "")), code=str(error.get("code", "")))
    try:
        result = data["result"]
        first = result["texts"][0]
        alternatives = tuple(str(item["text"]) for item in first.get("alternatives") or [])
        return DeeplTranslateResult(
            translated_text=str(first["text"]),
            detected_language=result.get("lang"),
            alternatives=alternatives,
        )
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise DictParseError(f"DeepL 返回结构不正确: {exc}") from exc


class DeeplProvider(BaseProvider):
    type = TranslationType.DEEPL

    def __init__(self, *args, request_id: Optional[int] = None, clock=time.time, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        # 首个 id 随机，之后每次请求加一
        self._next_id = request_id if request_id is not None else random.randrange(1_000_000, 100_000_000)
        self._clock = clock

    def build_body(self, query: QueryWordInfo, request_id: int) -> str:
        source = resolve(query.from_language).deepl_id or "auto"
        target = resolve(query.to_language).deepl_id
        if not target:
            raise self._unsupported(query)

        payload = {
            "jsonrpc": "2.0",
            "method": DEEPL_METHOD,
            "params": {
                "texts": [{"text": query.word, "requestAlternatives": 3}],
                "splitting": "newlines",
                "lang": {
                    "source_lang_user_selected": source,
                    "target_lang": target,
                },
                "timestamp": gen_fake_timestamp(query.word, int(self._clock() * 1000)),
            },
            "id": request_id,
        }
        return gen_fake_method_body(payload, request_id)

    async def _request(self, query: QueryWordInfo) -> DeeplTranslateResult:
        body = self.build_body(query, self._next_id)
        self._next_id += 1
        reply = await self._send(
            "POST",
            DEEPL_JSONRPC_URL,
            data=body.encode("utf-8"),
            headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
        )
        data = self._decode_json(reply)
        result = parse_deepl_result(data)
        self._raise_for_status(reply)
        return result
