"""腾讯机器翻译，5次/秒

Docs: https://cloud.tencent.com/document/product/551/15619
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from tencentcloud.common import credential
from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException
from tencentcloud.common.profile.client_profile import ClientProfile
from tencentcloud.common.profile.http_profile import HttpProfile
from tencentcloud.tmt.v20180321 import models as tmt_models
from tencentcloud.tmt.v20180321 import tmt_client

from ..constants import TENCENT_ENDPOINT
from ..exceptions import DictError, DictNetworkError, DictParseError, DictProviderError
from ..languages import resolve, youdao_id_from_detected
from ..models import DetectedLanguage, QueryWordInfo, TencentTranslateResult, TranslationType
from .base import BaseProvider

logger = logging.getLogger(__name__)

NETWORK_ERROR_CODES = frozenset({"ClientNetworkError", "ServerNetworkError"})


def _convert_sdk_error(exc: TencentCloudSDKException) -> DictError:
    code = exc.get_code() or ""
    message = exc.get_message() or str(exc)
    if code in NETWORK_ERROR_CODES:
        return DictNetworkError(message, code=code)
    return DictProviderError(message, code=code)


class TencentProvider(BaseProvider):
    type = TranslationType.TENCENT

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._client: Optional[tmt_client.TmtClient] = None

    def _get_client(self) -> tmt_client.TmtClient:
        if self._client is None:
            cred = credential.Credential(self.config.tencent_secret_id, self.config.tencent_secret_key)
            http_profile = HttpProfile(endpoint=TENCENT_ENDPOINT, reqTimeout=int(self.config.timeout))
            self._client = tmt_client.TmtClient(
                cred, self.config.tencent_region, ClientProfile(httpProfile=http_profile)
            )
        return self._client

    def build_request(self, query: QueryWordInfo) -> tmt_models.TextTranslateRequest:
        source = resolve(query.from_language).tencent_id or "auto"
        target = resolve(query.to_language).tencent_id
        if not target or target == "auto":
            raise self._unsupported(query)

        request = tmt_models.TextTranslateRequest()
        request.SourceText = query.word
        request.Source = source
        request.Target = target
        request.ProjectId = self.config.tencent_project_id
        return request

    async def _request(self, query: QueryWordInfo) -> TencentTranslateResult:
        request = self.build_request(query)
        client = self._get_client()
        try:
            # SDK 是同步的，放到线程里执行
            response = await asyncio.to_thread(client.TextTranslate, request)
        except TencentCloudSDKException as exc:
            raise _convert_sdk_error(exc) from exc

        target_text = getattr(response, "TargetText", None)
        if not isinstance(target_text, str):
            raise DictParseError("腾讯返回中缺少 TargetText")
        return TencentTranslateResult(
            target_text=target_text,
            source=str(getattr(response, "Source", "") or ""),
            target=str(getattr(response, "Target", "") or ""),
            request_id=str(getattr(response, "RequestId", "") or ""),
        )

    async def detect_language(self, text: str) -> DetectedLanguage:
        """腾讯语种识别。失败时抛出 DictError。"""
        request = tmt_models.LanguageDetectRequest()
        request.Text = text
        request.ProjectId = self.config.tencent_project_id
        client = self._get_client()
        try:
            response = await asyncio.to_thread(client.LanguageDetect, request)
        except TencentCloudSDKException as exc:
            logger.error("tencent detect error, code: %s, message: %s", exc.get_code(), exc.get_message())
            raise _convert_sdk_error(exc) from exc

        lang = getattr(response, "Lang", "") or ""
        return DetectedLanguage(youdao_id_from_detected(lang), 1.0 if lang else 0.0, source="tencent")
