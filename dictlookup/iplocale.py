"""判断当前出口 IP 是否位于指定地区（用来选择 .cn / .com 等区域域名）。"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .constants import IP_INFO_URL, IS_CHINESE_IP_KEY, USER_AGENT
from .exceptions import DictError
from .resources import SessionManager, send_request
from .storage import LocalStorage

logger = logging.getLogger(__name__)


class IpLocaleResolver:
    """查询 ipinfo.io 并把结果缓存到本地存储。"""

    def __init__(
        self,
        session_manager: SessionManager,
        storage: LocalStorage,
        region: str = "CN",
        storage_key: str = IS_CHINESE_IP_KEY,
    ) -> None:
        self.session_manager = session_manager
        self.storage = storage
        self.region = region.upper()
        self.storage_key = storage_key
        self._cached: Optional[bool] = None
        self._lock = asyncio.Lock()

    async def is_in_region(self, force_refresh: bool = False) -> bool:
        async with self._lock:
            if not force_refresh:
                if self._cached is not None:
                    return self._cached
                stored = await self.storage.get_item(self.storage_key)
                if isinstance(stored, bool):
                    self._cached = stored
                    return stored

            try:
                country = await self._request_country()
            except DictError as exc:
                # 查询失败时按国内处理，且不落地
                logger.warning("查询 IP 信息失败, 默认按 %s 处理: %s", self.region, exc)
                return True

            in_region = country.upper() == self.region
            logger.info("当前 IP 国家: %s, in %s: %s", country, self.region, in_region)
            self._cached = in_region
            await self.storage.set_item(self.storage_key, in_region)
            return in_region

    async def _request_country(self) -> str:
        reply = await send_request(
            self.session_manager,
            "GET",
            IP_INFO_URL,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        if not reply.ok:
            raise DictError(f"ipinfo 返回 {reply.status}", code=str(reply.status))
        data = reply.json()
        country = data.get("country") if isinstance(data, dict) else None
        if not isinstance(country, str) or not country:
            raise DictError("ipinfo 返回中没有 country 字段")
        return country
