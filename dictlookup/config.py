"""配置加载。"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

from .constants import DEFAULT_TIMEOUT, TENCENT_PROJECT_ID, TENCENT_REGION
from .exceptions import DictConfigError
from .models import TranslationType


def _mask(value: str) -> str:
    if not value:
        return "Not found"
    return f"{value[:4]}..."


@dataclass
class DictConfig:
    """各服务的凭据与运行参数。"""

    youdao_app_id: str = ""
    youdao_app_secret: str = ""
    baidu_app_id: str = ""
    baidu_app_secret: str = ""
    tencent_secret_id: str = ""
    tencent_secret_key: str = ""
    tencent_region: str = TENCENT_REGION
    tencent_project_id: int = TENCENT_PROJECT_ID
    caiyun_token: str = ""
    timeout: float = DEFAULT_TIMEOUT
    storage_path: Optional[Path] = None
    preferred_languages: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "DictConfig":
        load_dotenv(env_file, override=True)
        storage_path = os.getenv("DICTLOOKUP_STORAGE_PATH")
        timeout = os.getenv("DICTLOOKUP_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout_value = float(timeout)
        except ValueError as exc:
            raise DictConfigError(f"无效的超时时间: {timeout}") from exc
        if timeout_value <= 0:
            raise DictConfigError(f"无效的超时时间: {timeout}")

        preferred = os.getenv("DICTLOOKUP_PREFERRED_LANGUAGES", "")
        return cls(
            youdao_app_id=os.getenv("YOUDAO_APP_ID", ""),
            youdao_app_secret=os.getenv("YOUDAO_APP_SECRET", ""),
            baidu_app_id=os.getenv("BAIDU_APP_ID", ""),
            baidu_app_secret=os.getenv("BAIDU_APP_SECRET", ""),
            tencent_secret_id=os.getenv("TENCENT_SECRET_ID", ""),
            tencent_secret_key=os.getenv("TENCENT_SECRET_KEY", ""),
            tencent_region=os.getenv("TENCENT_REGION", TENCENT_REGION),
            caiyun_token=os.getenv("CAIYUN_TOKEN", ""),
            timeout=timeout_value,
            storage_path=Path(storage_path).expanduser() if storage_path else None,
            preferred_languages=tuple(lang.strip() for lang in preferred.split(",") if lang.strip()),
        )

    def has_credentials(self, type: TranslationType) -> bool:
        if type == TranslationType.YOUDAO:
            return bool(self.youdao_app_id and self.youdao_app_secret)
        if type == TranslationType.BAIDU:
            return bool(self.baidu_app_id and self.baidu_app_secret)
        if type == TranslationType.TENCENT:
            return bool(self.tencent_secret_id and self.tencent_secret_key)
        if type == TranslationType.CAIYUN:
            return bool(self.caiyun_token)
        # 网页版服务不需要凭据
        return True

    def summary(self) -> Dict[str, object]:
        return {
            "youdao_app_id": _mask(self.youdao_app_id),
            "baidu_app_id": _mask(self.baidu_app_id),
            "tencent_secret_id": _mask(self.tencent_secret_id),
            "tencent_region": self.tencent_region,
            "caiyun_token": _mask(self.caiyun_token),
            "timeout": self.timeout,
            "storage_path": str(self.storage_path) if self.storage_path else None,
            "preferred_languages": list(self.preferred_languages),
        }
