"""日志配置模块"""
import logging
import os
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


class SensitiveDataFilter(logging.Filter):
    """敏感信息过滤器"""

    def __init__(self):
        super().__init__()
        self.sensitive_patterns = [
            # API密钥模式
            (r'api[_-]?key["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', r'api_key="***"'),
            (r'api[_-]?secret["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', r'api_secret="***"'),
            (r'secret["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)', r'secret="***"'),

            # 私有接口请求头
            (r'[\'"]Sign[\'"]\s*:\s*[\'"]([^\'"]+)[\'"]', r"'Sign': '***'"),
            (r'[\'"]Key[\'"]\s*:\s*[\'"]([^\'"]+)[\'"]', r"'Key': '***'"),
        ]

    def _mask(self, text: str) -> str:
        for pattern, replacement in self.sensitive_patterns:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)

        # HMAC-SHA512 签名（128位十六进制）
        return re.sub(r'\b[a-fA-F0-9]{128}\b', '***', text)

    def filter(self, record):
        """过滤敏感信息"""
        try:
            if hasattr(record, 'msg') and record.msg:
                record.msg = self._mask(str(record.msg))

            if hasattr(record, 'args') and record.args and isinstance(record.args, tuple):
                record.args = tuple(
                    self._mask(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )
        except re.error as e:
            # 过滤出错不影响日志输出
            sys.stderr.write(f"敏感信息过滤出错: {e}\n")

        return True


def setup_logger(name: str = 'cryptsy', level: int = logging.INFO,
                 log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别
        log_dir: 日志文件目录，为空时只输出到控制台

    Returns:
        配置好的日志记录器
    """
    # 从环境变量读取日志级别
    env_level = os.getenv('CRYPTSY_LOG_LEVEL', '').upper()
    if env_level == 'DEBUG':
        level = logging.DEBUG
    elif env_level == 'WARNING':
        level = logging.WARNING
    elif env_level == 'ERROR':
        level = logging.ERROR

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 清除已有的处理器
    logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_filename = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d')}.log"
        handlers.append(logging.FileHandler(log_filename, encoding='utf-8'))

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    sensitive_filter = SensitiveDataFilter()

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(sensitive_filter)
        logger.addHandler(handler)

    return logger
