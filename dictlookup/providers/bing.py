"""必应网页翻译。

没有使用公开 API：先抓取翻译页面拿到 IG / IID / key / token，缓存起来，
之后每次请求带上递增的请求序号。token 过期或者返回空内容时重新获取。

Ref: https://github.com/plainheart/bing-translate-api/blob/master/src/index.js
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from typing import Any, Optional, Tuple

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from ..constants import (
    BING_CONFIG_KEY,
    BING_CONFIG_URL,
    BING_REQUEST_ATTEMPTS,
    BING_TRANSLATE_URL,
    USER_AGENT,
)
from ..exceptions import DictParseError, DictProviderError
from ..iplocale import IpLocaleResolver
from ..languages import resolve
from ..models import BingConfig, BingTranslateResult, QueryWordInfo, TranslationType
from ..parsers import parse_bing_config
from ..resources import SessionManager, send_request
from ..storage import LocalStorage
from .base import BaseProvider

logger = logging.getLogger(__name__)


class BingEmptyResponseError(DictProviderError):
    """必应返回空内容，通常是 token 失效或者域名不对。"""


def bing_tld(is_chinese_ip: bool) -> str:
    # 国内 IP 必须用 cn.bing.com，反之亦然
    return "cn" if is_chinese_ip else "www"


class BingSessionCache:
    """必应 token 缓存: Absent -> Valid -> Expired -> Valid ...

    刷新过程由锁保护，并发请求在 Expired 状态下只会触发一次刷新。
    """

    def __init__(
        self,
        session_manager: SessionManager,
        storage: LocalStorage,
        ip_resolver: Optional[IpLocaleResolver] = None,
        clock=time.time,
    ) -> None:
        self.session_manager = session_manager
        self.storage = storage
        self.ip_resolver = ip_resolver
        self._clock = clock
        self._config: Optional[BingConfig] = None
        self._tld: Optional[str] = None
        self._lock = asyncio.Lock()
        self.refresh_count = 0

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    @property
    def state(self) -> str:
        if self._config is None:
            return "absent"
        if self._config.is_expired(self._now_ms()):
            return "expired"
        return "valid"

    @property
    def config(self) -> Optional[BingConfig]:
        return dataclasses.replace(self._config) if self._config else None

    async def _get_tld(self, force_refresh: bool = False) -> str:
        if self._tld is None or force_refresh:
            is_chinese_ip = False
            if self.ip_resolver is not None:
                is_chinese_ip = await self.ip_resolver.is_in_region(force_refresh=force_refresh)
            self._tld = bing_tld(is_chinese_ip)
            logger.info("bing tld: %s", self._tld)
        return self._tld

    async def _load_stored(self) -> Optional[BingConfig]:
        stored = await self.storage.get_item(BING_CONFIG_KEY)
        if not isinstance(stored, dict):
            return None
        try:
            return BingConfig.from_dict(stored)
        except (KeyError, TypeError, ValueError):
            logger.warning("本地存储的必应配置无效，已忽略")
            return None

    async def _fetch_config(self) -> BingConfig:
        tld = await self._get_tld()
        reply = await send_request(
            self.session_manager,
            "GET",
            BING_CONFIG_URL.format(tld=tld),
            headers={"User-Agent": USER_AGENT},
        )
        if not reply.ok:
            raise DictProviderError(reply.reason or f"HTTP {reply.status}", code=str(reply.status))
        config = parse_bing_config(reply.text)
        self.refresh_count += 1
        logger.info("获取必应配置成功, cost: %d ms", reply.elapsed_ms)
        return config

    async def acquire(self) -> Tuple[BingConfig, str]:
        """返回可用的配置（已递增请求序号）和域名。

        序号只在内存中递增，请求发出并收到响应后由 save 写回存储；
        请求中途被取消时用 release 退回序号。
        """
        async with self._lock:
            config = self._config
            if config is None:
                config = await self._load_stored()
            if config is None or config.is_expired(self._now_ms()):
                if config is not None:
                    logger.info("必应 token 已过期, 重新获取")
                config = await self._fetch_config()
            tld = await self._get_tld()

            config.count += 1
            self._config = config
            return dataclasses.replace(config), tld

    def release(self, count: int) -> None:
        """退回 count 对应的序号；之后已有新的序号发出时不做处理。"""
        if self._config is not None and self._config.count == count:
            self._config.count -= 1

    async def save(self) -> None:
        async with self._lock:
            if self._config is not None:
                await self.storage.set_item(BING_CONFIG_KEY, self._config.to_dict())

    async def invalidate(self, recheck_ip: bool = True) -> None:
        """丢弃当前 token；recheck_ip 时同时重新判断域名。"""
        async with self._lock:
            self._config = None
            await self.storage.remove_item(BING_CONFIG_KEY)
            if recheck_ip:
                await self._get_tld(force_refresh=True)


def parse_bing_result(data: Any) -> BingTranslateResult:
    if isinstance(data, dict) and "statusCode" in data:
        raise DictProviderError(str(data.get("errorMessage") or "Bing error"), code=str(data["statusCode"]))
    try:
        item = data[0]
        translation = item["translations"][0]
        detected = item.get("detectedLanguage") or {}
        return BingTranslateResult(
            translated_text=str(translation["text"]),
            to_language=str(translation.get("to", "")),
            detected_language=detected.get("language"),
            detected_score=detected.get("score"),
        )
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise DictParseError(f"必应返回结构不正确: {exc}") from exc


class BingProvider(BaseProvider):
    type = TranslationType.BING

    def __init__(self, *args, session_cache: BingSessionCache, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.session_cache = session_cache

    async def _translate_once(self, query: QueryWordInfo, from_id: str, to_id: str) -> BingTranslateResult:
        config, tld = await self.session_cache.acquire()
        params = {
            "isVertical": "1",
            "IG": config.ig,
            "IID": f"{config.iid}.{config.count}",
        }
        data = {
            "fromLang": from_id,
            "text": query.word,
            "to": to_id,
            "token": config.token,
            "key": config.key,
        }
        try:
            reply = await self._send(
                "POST",
                BING_TRANSLATE_URL.format(tld=tld),
                params=params,
                data=data,
                headers={"User-Agent": USER_AGENT},
            )
        except asyncio.CancelledError:
            self.session_cache.release(config.count)
            raise
        await self.session_cache.save()
        if not reply.text.strip():
            logger.warning("必应返回为空, 重新获取 token 后重试")
            await self.session_cache.invalidate()
            raise BingEmptyResponseError("Bing returned an empty response", code="empty_response")
        body = self._decode_json(reply)
        if not body:
            await self.session_cache.invalidate()
            raise BingEmptyResponseError("Bing returned an empty response", code="empty_response")
        return parse_bing_result(body)

    async def _request(self, query: QueryWordInfo) -> BingTranslateResult:
        to_id = resolve(query.to_language).microsoft_id
        if not to_id or to_id == "auto-detect":
            raise self._unsupported(query)
        from_id = resolve(query.from_language).microsoft_id or "auto-detect"

        # 空响应只重试一次
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(BING_REQUEST_ATTEMPTS),
            retry=retry_if_exception_type(BingEmptyResponseError),
            reraise=True,
        ):
            with attempt:
                return await self._translate_once(query, from_id, to_id)
        raise DictProviderError("Bing request failed", code="retry_exhausted")  # pragma: no cover
