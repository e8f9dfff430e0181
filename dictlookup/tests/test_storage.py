"""本地存储测试"""

import json

import pytest

from dictlookup.storage import LocalStorage


@pytest.mark.asyncio
async def test_memory_storage():
    """测试不落地的内存存储"""
    storage = LocalStorage()
    assert await storage.get_item("missing") is None
    assert await storage.get_item("missing", "default") == "default"

    await storage.set_item("isChineseIP", False)
    assert await storage.get_item("isChineseIP") is False

    await storage.remove_item("isChineseIP")
    assert await storage.get_item("isChineseIP") is None


@pytest.mark.asyncio
async def test_file_storage_persists(tmp_path):
    """测试写入的数据在新实例中仍可读取"""
    path = tmp_path / "storage.json"
    storage = LocalStorage(path)
    await storage.set_item("BingConfig", {"token": "abc", "count": 2})

    assert json.loads(path.read_text(encoding="utf-8")) == {"BingConfig": {"token": "abc", "count": 2}}
    reopened = LocalStorage(path)
    assert await reopened.get_item("BingConfig") == {"token": "abc", "count": 2}


@pytest.mark.asyncio
async def test_corrupt_file_is_discarded(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    storage = LocalStorage(path)

    assert await storage.get_item("BingConfig") is None
    assert not path.exists()


@pytest.mark.asyncio
async def test_clear(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    storage = LocalStorage(path)
    await storage.set_item("a", 1)
    assert path.exists()

    await storage.clear()
    assert await storage.get_item("a") is None
    assert not path.exists()
