"""语言代码映射测试"""

import pytest

from dictlookup.languages import (
    LANGUAGE_ITEMS,
    get_language_item,
    is_chinese_language,
    is_known_language,
    resolve,
    youdao_id_from_detected,
)


def test_resolve_simplified_chinese():
    """测试简体中文在各服务中的代码"""
    ids = resolve("zh-CHS")
    assert ids.google_id == "zh-CN"
    assert ids.baidu_id == "zh"
    assert ids.tencent_id == "zh"
    assert ids.caiyun_id == "zh"
    assert ids.deepl_id == "ZH"
    assert ids.microsoft_id == "zh-Hans"
    assert ids.linguee_name == "chinese"


def test_unknown_language_falls_back_to_auto():
    """测试未知语言回退到 auto，不抛异常"""
    assert get_language_item("xx").youdao_id == "auto"
    ids = resolve("xx")
    assert ids.google_id == "auto"
    assert ids.microsoft_id == "auto-detect"
    assert ids.deepl_id is None
    assert ids.linguee_name is None
    assert not is_known_language("xx")


def test_youdao_ids_are_unique():
    """测试语言表以有道代码为唯一键"""
    ids = [item.youdao_id for item in LANGUAGE_ITEMS]
    assert len(ids) == len(set(ids))


@pytest.mark.parametrize(
    "code, expected",
    [
        ("zh-cn", "zh-CHS"),
        ("zh-tw", "zh-CHT"),
        ("en", "en"),
        ("jp", "ja"),
        ("EN", "en"),
        ("zh-CN", "zh-CHS"),
        ("qq", "auto"),
        ("", "auto"),
    ],
)
def test_youdao_id_from_detected(code, expected):
    """测试检测结果转回有道代码"""
    assert youdao_id_from_detected(code) == expected


def test_is_chinese_language():
    assert is_chinese_language("zh-CHS")
    assert is_chinese_language("zh-CHT")
    assert not is_chinese_language("ja")
