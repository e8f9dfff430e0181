"""常量和配置定义"""

# 请求相关常量
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/105.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT = 15

YOUDAO_API_URL = "https://openapi.youdao.com/api"
BAIDU_API_URL = "https://fanyi-api.baidu.com/api/trans/vip/translate"
CAIYUN_API_URL = "https://api.interpreter.caiyunai.com/v1/translator"
GOOGLE_WEB_URL = "https://translate.google.{tld}/m"
BING_CONFIG_URL = "https://{tld}.bing.com/translator"
BING_TRANSLATE_URL = "https://{tld}.bing.com/ttranslatev3"
DEEPL_JSONRPC_URL = "https://www2.deepl.com/jsonrpc"
LINGUEE_SEARCH_URL = "https://www.linguee.com/{source}-{target}/search"
IP_INFO_URL = "https://ipinfo.io"

TENCENT_ENDPOINT = "tmt.tencentcloudapi.com"
TENCENT_REGION = "ap-guangzhou"
TENCENT_PROJECT_ID = 0

# 彩云小译目前只支持这几个翻译方向
CAIYUN_SUPPORTED_TRANS_TYPES = frozenset({"zh2en", "zh2ja", "en2zh", "ja2zh"})

# 本地存储的键
IS_CHINESE_IP_KEY = "isChineseIP"
BING_CONFIG_KEY = "BingConfig"

# 必应网页配置缺省值
BING_DEFAULT_IID = "translator.5023"
BING_REQUEST_ATTEMPTS = 2

# DeepL 网页版 JSON-RPC
DEEPL_METHOD = "LMT_handle_texts"

# 性能配置
DEFAULT_PERFORMANCE_CONFIG = {
    'timeout': DEFAULT_TIMEOUT,
    'ip_region': 'CN',
}

# 有道错误码
YOUDAO_ERROR_MESSAGES = {
    '101': '缺少必填的参数',
    '102': '不支持的语言类型',
    '103': '翻译文本过长',
    '108': '应用ID无效',
    '110': '无相关服务的有效实例',
    '111': '开发者账号无效',
    '113': '查询文本不能为空',
    '202': '签名检验失败',
    '401': '账户已经欠费',
    '411': '访问频率受限',
}

# 展示区块标题
DETAILS_SECTION_TITLE = "Details"
TRANSLATION_SECTION_TITLE = "Translation"
