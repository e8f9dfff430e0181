"""各服务适配器测试"""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import aiohttp
import pytest
from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException

from dictlookup.constants import (
    BAIDU_API_URL,
    CAIYUN_API_URL,
    DEEPL_JSONRPC_URL,
    YOUDAO_API_URL,
)
from dictlookup.models import (
    BaiduTranslateResult,
    CaiyunTranslateResult,
    DeeplTranslateResult,
    ErrorKind,
    GoogleTranslateResult,
    LingueeDictionaryResult,
    LingueeDisplayType,
    QueryWordInfo,
    TencentTranslateResult,
    TranslationType,
    YoudaoDictionaryResult,
)
from dictlookup.providers import (
    BaiduProvider,
    CaiyunProvider,
    DeeplProvider,
    GoogleProvider,
    LingueeProvider,
    TencentProvider,
    YoudaoProvider,
)
from dictlookup.utils import CancellationToken, PerformanceMetrics

from .conftest import FakeResponse

GOOD = QueryWordInfo("good", "en", "zh-CHS")

LINGUEE_PAGE = """
<html><body>
<div class="exact">
  <div class="lemma featured">
    <div class="lemma_desc">
      <span class="tag_lemma"><a class="dictLink">good</a> <span class="tag_wordtype">adjective</span></span>
    </div>
    <div class="lemma_content">
      <div class="translation featured">
        <span class="tag_trans"><a class="dictLink">好</a><span class="tag_type" title="adjective">adj</span></span>
        <div class="example line"><span class="tag_s">good news</span><span class="tag_t">好消息</span></div>
      </div>
      <div class="translation">
        <span class="tag_trans"><a class="dictLink">良好</a></span>
      </div>
    </div>
  </div>
</div>
<div class="inexact">
  <div class="lemma">
    <div class="lemma_desc"><a class="dictLink">goods</a></div>
    <div class="translation"><a class="dictLink">货物</a></div>
  </div>
</div>
<table class="result_table">
  <tr><td class="left"><div class="wrap">It is good.</div></td><td class="right2"><div class="wrap">很好。</div></td></tr>
</table>
</body></html>
"""


@pytest.mark.asyncio
async def test_youdao_success(fake_session, session_manager, config):
    """测试有道查询成功"""
    fake_session.add(YOUDAO_API_URL, FakeResponse({
        "errorCode": "0",
        "query": "good",
        "l": "en2zh-CHS",
        "translation": ["好"],
        "isWord": True,
        "basic": {"us-phonetic": "ɡʊd", "explains": ["adj. 好的"], "exam_type": ["高中", "CET4"]},
        "web": [{"key": "good", "value": ["好", "善"]}],
    }))
    provider = YoudaoProvider(session_manager, config, clock=lambda: 1700000000)
    result = await provider.translate(GOOD)

    assert result.ok
    assert isinstance(result.result, YoudaoDictionaryResult)
    assert result.result.translation == ("好",)
    assert result.result.exam_type == ("高中", "CET4")
    request = fake_session.requests[0]
    assert request["method"] == "POST"
    assert request["data"]["q"] == "good"


@pytest.mark.asyncio
async def test_youdao_error_code_with_http_200(fake_session, session_manager, config):
    """测试有道返回 200 但 errorCode 非 0 时按服务端拒绝处理"""
    fake_session.add(YOUDAO_API_URL, FakeResponse({"errorCode": "108"}))
    provider = YoudaoProvider(session_manager, config)
    result = await provider.translate(GOOD)

    assert not result.ok
    assert result.error.kind == ErrorKind.PROVIDER_REJECTED
    assert result.error.code == "108"
    assert result.error.type == TranslationType.YOUDAO


@pytest.mark.asyncio
async def test_youdao_non_json_error_page(fake_session, session_manager, config):
    fake_session.add(YOUDAO_API_URL, FakeResponse("<html>bad gateway</html>", status=502, reason="Bad Gateway"))
    result = await YoudaoProvider(session_manager, config).translate(GOOD)
    assert result.error.kind == ErrorKind.PROVIDER_REJECTED
    assert result.error.code == "502"


@pytest.mark.asyncio
async def test_youdao_malformed_payload(fake_session, session_manager, config):
    """测试结构不对时为解析失败"""
    fake_session.add(YOUDAO_API_URL, FakeResponse({"errorCode": "0", "translation": "好"}))
    result = await YoudaoProvider(session_manager, config).translate(GOOD)
    assert result.error.kind == ErrorKind.PARSE_FAILURE


@pytest.mark.asyncio
@pytest.mark.parametrize("extra", [{"basic": {"wfs": 1}}, {"web": 1}, {"basic": {"wfs": ["better"]}}])
async def test_youdao_nested_fields_wrong_type(fake_session, session_manager, config, extra):
    """测试 wfs、web 类型不对时为解析失败"""
    reply = {"errorCode": "0", "query": "good", "l": "en2zh-CHS", "translation": ["好"], **extra}
    fake_session.add(YOUDAO_API_URL, FakeResponse(reply))
    result = await YoudaoProvider(session_manager, config).translate(GOOD)
    assert result.error.kind == ErrorKind.PARSE_FAILURE


@pytest.mark.asyncio
async def test_youdao_language_ids_mapped(fake_session, session_manager, config):
    """测试有道请求使用映射后的语言代码，未知语言退回 auto"""
    fake_session.add(YOUDAO_API_URL, FakeResponse({"errorCode": "0", "translation": ["好"]}))
    provider = YoudaoProvider(session_manager, config)
    await provider.translate(QueryWordInfo("good", "xx-unknown", "zh-CHS"))

    request = fake_session.requests[0]
    assert request["data"]["from"] == "auto"
    assert request["data"]["to"] == "zh-CHS"


@pytest.mark.asyncio
async def test_baidu_success(fake_session, session_manager, config):
    fake_session.add(BAIDU_API_URL, FakeResponse({
        "from": "en", "to": "zh", "trans_result": [{"src": "good", "dst": "好"}],
    }))
    result = await BaiduProvider(session_manager, config).translate(GOOD)

    assert isinstance(result.result, BaiduTranslateResult)
    assert result.result.trans_result[0].dst == "好"
    assert fake_session.requests[0]["method"] == "GET"
    assert fake_session.requests[0]["params"]["to"] == "zh"


@pytest.mark.asyncio
async def test_baidu_error_code_with_http_200(fake_session, session_manager, config):
    """测试百度返回 error_code 时按服务端拒绝处理"""
    fake_session.add(BAIDU_API_URL, FakeResponse({"error_code": "54001", "error_msg": "Invalid Sign"}))
    result = await BaiduProvider(session_manager, config).translate(GOOD)

    assert result.error.kind == ErrorKind.PROVIDER_REJECTED
    assert result.error.code == "54001"
    assert result.error.message == "Invalid Sign"


@pytest.mark.asyncio
async def test_baidu_unsupported_target(fake_session, session_manager, config):
    result = await BaiduProvider(session_manager, config).translate(QueryWordInfo("good", "en", "auto"))
    assert result.error.kind == ErrorKind.UNSUPPORTED_LANGUAGE_PAIR
    assert fake_session.requests == []


@pytest.mark.asyncio
async def test_caiyun_success(fake_session, session_manager, config):
    fake_session.add(CAIYUN_API_URL, FakeResponse({"target": ["好"], "confidence": 0.8, "rc": 0}))
    result = await CaiyunProvider(session_manager, config).translate(GOOD)

    assert isinstance(result.result, CaiyunTranslateResult)
    assert result.result.target == ("好",)
    request = fake_session.requests[0]
    assert request["json"] == {"source": ["good"], "trans_type": "en2zh", "detect": False}
    assert request["headers"]["x-authorization"] == "token caiyun-token"


@pytest.mark.asyncio
@pytest.mark.parametrize("from_language, to_language", [("en", "ko"), ("fr", "zh-CHS"), ("auto", "zh-CHS")])
async def test_caiyun_rejects_pair_without_request(fake_session, session_manager, config, from_language, to_language):
    """测试彩云不支持的语言方向不发送请求"""
    provider = CaiyunProvider(session_manager, config)
    result = await provider.translate(QueryWordInfo("good", from_language, to_language))

    assert result.error.kind == ErrorKind.UNSUPPORTED_LANGUAGE_PAIR
    assert fake_session.requests == []


@pytest.mark.asyncio
async def test_google_scrape(fake_session, session_manager, config):
    """测试谷歌网页抓取与反转义"""
    fake_session.add(
        "https://translate.google.com/m",
        FakeResponse('<div class="other">x</div><div class="result-container">好 &amp; 不错</div>'),
    )
    result = await GoogleProvider(session_manager, config).translate(GOOD)

    assert isinstance(result.result, GoogleTranslateResult)
    assert result.result.translated_text == "好 & 不错"
    assert result.result.tld == "com"
    assert fake_session.requests[0]["params"] == {"sl": "en", "tl": "zh-CN", "hl": "zh-CN", "q": "good"}


@pytest.mark.asyncio
async def test_google_tld_from_preferred_language(fake_session, session_manager, config):
    config.preferred_languages = ("zh-CHS", "en")
    fake_session.add("https://translate.google.cn/m", FakeResponse('<div class="result-container">好</div>'))
    result = await GoogleProvider(session_manager, config).translate(GOOD)
    assert result.result.tld == "cn"


@pytest.mark.asyncio
async def test_google_tld_from_ip(fake_session, session_manager, config):
    resolver = MagicMock()

    async def in_region(force_refresh=False):
        return True

    resolver.is_in_region = in_region
    fake_session.add("https://translate.google.cn/m", FakeResponse('<div class="result-container">好</div>'))
    result = await GoogleProvider(session_manager, config, ip_resolver=resolver).translate(GOOD)
    assert result.result.tld == "cn"


@pytest.mark.asyncio
async def test_google_page_without_result(fake_session, session_manager, config):
    fake_session.add("https://translate.google.com/m", FakeResponse("<html>captcha</html>"))
    result = await GoogleProvider(session_manager, config).translate(GOOD)
    assert result.error.kind == ErrorKind.PARSE_FAILURE


@pytest.mark.asyncio
async def test_tencent_success(session_manager, config):
    """测试腾讯翻译，SDK 客户端使用 mock"""
    client = MagicMock()
    client.TextTranslate.return_value = SimpleNamespace(
        TargetText="好", Source="en", Target="zh", RequestId="req-1"
    )
    with patch("dictlookup.providers.tencent.TencentProvider._get_client", return_value=client):
        result = await TencentProvider(session_manager, config).translate(GOOD)

    assert isinstance(result.result, TencentTranslateResult)
    assert result.result.target_text == "好"
    request = client.TextTranslate.call_args[0][0]
    assert request.Source == "en"
    assert request.Target == "zh"
    assert request.SourceText == "good"


@pytest.mark.asyncio
async def test_tencent_sdk_error(session_manager, config):
    client = MagicMock()
    client.TextTranslate.side_effect = TencentCloudSDKException("AuthFailure.SignatureFailure", "bad signature")
    with patch("dictlookup.providers.tencent.TencentProvider._get_client", return_value=client):
        result = await TencentProvider(session_manager, config).translate(GOOD)

    assert result.error.kind == ErrorKind.PROVIDER_REJECTED
    assert result.error.code == "AuthFailure.SignatureFailure"


@pytest.mark.asyncio
async def test_tencent_unsupported_pair(session_manager, config):
    """测试腾讯不支持的目标语言不会创建客户端"""
    with patch("dictlookup.providers.tencent.TencentProvider._get_client") as get_client:
        result = await TencentProvider(session_manager, config).translate(QueryWordInfo("good", "en", "sv"))

    assert result.error.kind == ErrorKind.UNSUPPORTED_LANGUAGE_PAIR
    get_client.assert_not_called()


@pytest.mark.asyncio
async def test_deepl_request(fake_session, session_manager, config):
    """测试 DeepL 请求体按原始字节发送，且请求 id 递增"""
    reply = {
        "jsonrpc": "2.0",
        "id": 10,
        "result": {"texts": [{"text": "好", "alternatives": [{"text": "良好"}]}], "lang": "EN"},
    }
    fake_session.add(DEEPL_JSONRPC_URL, FakeResponse(reply))
    provider = DeeplProvider(session_manager, config, request_id=10, clock=lambda: 1700000000)

    first = await provider.translate(GOOD)
    second = await provider.translate(GOOD)

    assert isinstance(first.result, DeeplTranslateResult)
    assert first.result.translated_text == "好"
    assert first.result.alternatives == ("良好",)
    assert first.result.detected_language == "EN"
    assert second.ok

    bodies = [request["data"] for request in fake_session.requests]
    assert all(isinstance(body, bytes) for body in bodies)
    assert b'"method" : "LMT_handle_texts"' in bodies[0]
    assert b'"method": "LMT_handle_texts"' in bodies[1]
    assert [json.loads(body)["id"] for body in bodies] == [10, 11]


@pytest.mark.asyncio
async def test_deepl_error(fake_session, session_manager, config):
    fake_session.add(
        DEEPL_JSONRPC_URL,
        FakeResponse({"jsonrpc": "2.0", "error": {"code": 1042912, "message": "Too many requests"}}, status=429),
    )
    result = await DeeplProvider(session_manager, config).translate(GOOD)
    assert result.error.kind == ErrorKind.PROVIDER_REJECTED
    assert result.error.code == "1042912"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"texts": ["好"]}, "好", {"texts": [{"text": "好", "alternatives": ["良好"]}]}])
async def test_deepl_wrongly_typed_result(fake_session, session_manager, config, payload):
    fake_session.add(DEEPL_JSONRPC_URL, FakeResponse({"jsonrpc": "2.0", "id": 1, "result": payload}))
    result = await DeeplProvider(session_manager, config).translate(GOOD)
    assert result.error.kind == ErrorKind.PARSE_FAILURE


@pytest.mark.asyncio
async def test_linguee_parse(fake_session, session_manager, config):
    """测试 Linguee 网页解析"""
    fake_session.add("https://www.linguee.com/english-chinese/search", FakeResponse(LINGUEE_PAGE))
    result = await LingueeProvider(session_manager, config).translate(GOOD)

    assert isinstance(result.result, LingueeDictionaryResult)
    linguee = result.result
    assert len(linguee.word_items) == 1
    word = linguee.word_items[0]
    assert word.word == "good"
    assert word.pos == "adjective"
    assert word.featured
    assert [e.explanation for e in word.explanation_items] == ["好", "良好"]
    first = word.explanation_items[0]
    assert first.pos == "adjective"
    assert first.frequency == LingueeDisplayType.COMMON
    assert first.examples[0].example == "good news"
    assert first.examples[0].translation == "好消息"
    assert word.explanation_items[1].frequency == LingueeDisplayType.LESS_COMMON
    assert [w.word for w in linguee.related_words] == ["goods"]
    assert linguee.examples[0].example == "It is good."
    assert linguee.examples[0].translation == "很好。"
    assert fake_session.requests[0]["params"] == {"source": "auto", "query": "good"}


@pytest.mark.asyncio
async def test_linguee_requires_both_languages(fake_session, session_manager, config):
    result = await LingueeProvider(session_manager, config).translate(QueryWordInfo("good", "auto", "zh-CHS"))
    assert result.error.kind == ErrorKind.UNSUPPORTED_LANGUAGE_PAIR
    assert fake_session.requests == []


@pytest.mark.asyncio
async def test_network_failure(fake_session, session_manager, config):
    """测试传输层错误转换为网络错误"""
    fake_session.add(BAIDU_API_URL, aiohttp.ClientConnectionError("connection reset"))
    metrics = PerformanceMetrics()
    result = await BaiduProvider(session_manager, config, metrics).translate(GOOD)

    assert result.error.kind == ErrorKind.NETWORK_FAILURE
    assert result.error.code == "ClientConnectionError"
    stats = metrics.get_metrics()
    assert stats["total_requests"] == 1
    assert stats["successful_requests"] == 0
    assert stats["providers"]["Baidu"]["failures"] == 1


@pytest.mark.asyncio
async def test_timeout(fake_session, session_manager, config):
    fake_session.add(BAIDU_API_URL, asyncio.TimeoutError())
    result = await BaiduProvider(session_manager, config).translate(GOOD)
    assert result.error.kind == ErrorKind.NETWORK_FAILURE
    assert result.error.code == "timeout"


@pytest.mark.asyncio
async def test_cancel_in_flight(fake_session, session_manager, config):
    """测试请求进行中被取消"""
    fake_session.add(BAIDU_API_URL, FakeResponse({"trans_result": [{"src": "good", "dst": "好"}]}, delay=5))
    token = CancellationToken()
    task = asyncio.create_task(BaiduProvider(session_manager, config).translate(GOOD, token))
    await asyncio.sleep(0.01)
    token.cancel("new query")
    result = await asyncio.wait_for(task, timeout=1)

    assert result.error.kind == ErrorKind.CANCELLED
    assert result.error.message == "new query"


@pytest.mark.asyncio
async def test_cancelled_before_start(fake_session, session_manager, config):
    token = CancellationToken()
    token.cancel()
    result = await BaiduProvider(session_manager, config).translate(GOOD, token)
    assert result.error.kind == ErrorKind.CANCELLED
    assert fake_session.requests == []
