"""简单的本地键值存储。"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class LocalStorage:
    """以内存为主、可选 JSON 文件落地的键值存储。

    只保存少量数据（IP 是否在国内、必应 token），所以整文件读写即可。
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._items: Dict[str, Any] = {}
        self._file_path = file_path
        self._loaded = file_path is None
        self._lock = asyncio.Lock()

    def _load(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        if not self._file_path or not self._file_path.exists():
            return
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("本地存储文件损坏，已丢弃: %s", self._file_path)
            self._file_path.unlink(missing_ok=True)
            return
        if isinstance(data, dict):
            self._items.update(data)

    def _flush(self) -> None:
        if not self._file_path:
            return
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(self._items, ensure_ascii=False), encoding="utf-8")

    async def get_item(self, key: str, default: Any = None) -> Any:
        async with self._lock:
            self._load()
            return self._items.get(key, default)

    async def set_item(self, key: str, value: Any) -> None:
        async with self._lock:
            self._load()
            self._items[key] = value
            self._flush()

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            self._load()
            if self._items.pop(key, None) is not None:
                self._flush()

    async def clear(self) -> None:
        async with self._lock:
            self._items.clear()
            self._loaded = True
            if self._file_path:
                self._file_path.unlink(missing_ok=True)
