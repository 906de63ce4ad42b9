"""配置管理模块"""
import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv

from ..client import PRIVATE_API_URL, PUBLIC_API_URL, CryptsyClient

# 加载 .env 中的环境变量
load_dotenv()

logger = logging.getLogger('cryptsy')


class Settings:
    """从环境变量读取的客户端配置，API凭证只在调用私有接口时才需要"""

    def _get_env(self, key: str, default: str = '', required: bool = False) -> str:
        value = os.getenv(key, default)

        if required and not value:
            raise ValueError(f"环境变量 {key} 未设置")

        return value

    @property
    def api_key(self) -> str:
        return self._get_env('CRYPTSY_API_KEY')

    @property
    def api_secret(self) -> str:
        return self._get_env('CRYPTSY_API_SECRET')

    @property
    def public_url(self) -> str:
        return self._get_env('CRYPTSY_PUBLIC_URL', PUBLIC_API_URL)

    @property
    def private_url(self) -> str:
        return self._get_env('CRYPTSY_PRIVATE_URL', PRIVATE_API_URL)

    @property
    def timeout(self) -> float:
        raw = self._get_env('CRYPTSY_TIMEOUT', '30')
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"环境变量 CRYPTSY_TIMEOUT 不是有效数字: {raw}")

    @property
    def log_level(self) -> str:
        return self._get_env('LOG_LEVEL', 'INFO').upper()

    def get_log_level(self) -> int:
        """获取日志级别常量"""
        level_map = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL
        }
        return level_map.get(self.log_level, logging.INFO)

    def transport_options(self) -> Dict[str, Any]:
        return {'timeout': self.timeout}

    def validate(self, require_credentials: bool = True) -> bool:
        """验证配置，凭证缺失时抛出 ValueError（只提示变量名，不输出值）"""
        if require_credentials:
            self._get_env('CRYPTSY_API_KEY', required=True)
            self._get_env('CRYPTSY_API_SECRET', required=True)
        # 触发数字格式检查
        self.timeout
        logger.info("✅ 配置验证通过")
        return True


def create_client(settings: Settings, **kwargs: Any) -> CryptsyClient:
    """按配置创建客户端，kwargs 会传给 CryptsyClient"""
    return CryptsyClient(
        settings.api_key,
        settings.api_secret,
        settings.transport_options(),
        public_url=settings.public_url,
        private_url=settings.private_url,
        **kwargs
    )
