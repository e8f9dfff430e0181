"""异常处理模块"""

from .models import ErrorKind, RequestErrorInfo, TranslationType


class DictError(Exception):
    """查询服务基础异常类"""

    kind = ErrorKind.PROVIDER_REJECTED

    def __init__(self, message: str = "", code: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.code = str(code)

    def to_error_info(self, type: TranslationType) -> RequestErrorInfo:
        return RequestErrorInfo(type=type, code=self.code, message=self.message, kind=self.kind)


class DictNetworkError(DictError):
    """网络错误，没有拿到 HTTP 响应"""

    kind = ErrorKind.NETWORK_FAILURE


class DictProviderError(DictError):
    """服务端拒绝请求，带有服务自己的错误码"""

    kind = ErrorKind.PROVIDER_REJECTED


class DictLanguageError(DictError):
    """服务不支持该语言方向"""

    kind = ErrorKind.UNSUPPORTED_LANGUAGE_PAIR


class DictParseError(DictError):
    """返回数据结构不符合预期"""

    kind = ErrorKind.PARSE_FAILURE


class DictCancelledError(DictError):
    """调用方取消了请求"""

    kind = ErrorKind.CANCELLED


class DictConfigError(DictError):
    """配置错误"""
    pass


class DictValidationError(DictError):
    """输入验证错误"""
    pass
