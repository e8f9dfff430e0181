"""测试公共夹具：用假的 aiohttp 会话记录请求并返回预设响应。"""

import asyncio
import json

import pytest

from dictlookup.config import DictConfig
from dictlookup.resources import SessionManager
from dictlookup.storage import LocalStorage


class FakeResponse:
    """模拟 aiohttp 响应，只实现 send_request 用到的部分。"""

    def __init__(self, body="", status=200, reason="OK", delay=0.0):
        if not isinstance(body, str):
            body = json.dumps(body, ensure_ascii=False)
        self.body = body
        self.status = status
        self.reason = reason
        self.delay = delay

    async def text(self):
        return self.body


class _RequestContext:
    def __init__(self, reply):
        self.reply = reply

    async def __aenter__(self):
        if isinstance(self.reply, BaseException):
            raise self.reply
        if self.reply.delay:
            await asyncio.sleep(self.reply.delay)
        return self.reply

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """按 URL 前缀路由的假会话。同一路由的多个响应依次返回，最后一个重复使用。"""

    def __init__(self):
        self.closed = False
        self.requests = []
        self._routes = []

    def add(self, url_prefix, *replies):
        # 后添加的路由优先匹配
        self._routes.insert(0, (url_prefix, list(replies)))
        return self

    def request(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        for prefix, replies in self._routes:
            if url.startswith(prefix):
                reply = replies.pop(0) if len(replies) > 1 else replies[0]
                return _RequestContext(reply)
        raise AssertionError(f"unexpected request: {method} {url}")

    def requests_to(self, url_prefix):
        return [request for request in self.requests if request["url"].startswith(url_prefix)]

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def session_manager(fake_session):
    return SessionManager(session=fake_session)


@pytest.fixture
def storage():
    return LocalStorage()


@pytest.fixture
def config():
    return DictConfig(
        youdao_app_id="youdao-app",
        youdao_app_secret="youdao-secret",
        baidu_app_id="2015063000000001",
        baidu_app_secret="12345678",
        tencent_secret_id="tencent-id",
        tencent_secret_key="tencent-key",
        caiyun_token="caiyun-token",
    )
