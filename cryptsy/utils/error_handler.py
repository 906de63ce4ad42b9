"""错误类型与错误处理模块"""
import json
import logging
import traceback
from enum import Enum
from typing import Any, Callable, Dict, Optional

import requests

logger = logging.getLogger('cryptsy')


class ErrorType(Enum):
    INVALID_METHOD = "invalid_method"
    TRANSPORT_ERROR = "transport_error"
    PARSE_ERROR = "parse_error"
    API_ERROR = "api_error"
    UNKNOWN_ERROR = "unknown_error"
    CONFIGURATION_ERROR = "configuration_error"


class CryptsyError(Exception):
    """所有客户端错误的基类"""

    error_type = ErrorType.UNKNOWN_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidMethodError(CryptsyError):
    """方法名不在公共/私有方法表中，未发出任何请求"""

    error_type = ErrorType.INVALID_METHOD

    def __init__(self, method: str):
        super().__init__(f"Invalid method: {method}")
        self.method = method


class TransportError(CryptsyError):
    """网络层错误（连接失败、超时等），保留原始异常"""

    error_type = ErrorType.TRANSPORT_ERROR

    def __init__(self, original: BaseException):
        super().__init__(f"Error in server response: {original!r}")
        self.original = original
        self.__cause__ = original


class ParseError(CryptsyError):
    """响应体不是合法JSON"""

    error_type = ErrorType.PARSE_ERROR

    def __init__(self, body: str):
        super().__init__(f"Error parsing JSON: {body}")
        self.body = body


class ApiError(CryptsyError):
    """服务端返回了 error 字段，消息原样保留"""

    error_type = ErrorType.API_ERROR


class UnknownError(CryptsyError):
    """响应既不是成功结构也不是错误结构"""

    error_type = ErrorType.UNKNOWN_ERROR

    def __init__(self, payload: Any):
        super().__init__("Unknown error")
        self.payload = payload


class ErrorHandler:
    """错误处理器

    只负责分类、记录日志、计数和回调，不重试也不吞掉错误，
    错误最终由调用方决定如何处理。
    """

    def __init__(self):
        self.error_counts: Dict[ErrorType, int] = {}
        self.error_callbacks: Dict[ErrorType, Callable] = {}

    def register_error_callback(self, error_type: ErrorType, callback: Callable):
        self.error_callbacks[error_type] = callback

    def handle_error(self, error: Exception, context: str = "",
                     error_type: Optional[ErrorType] = None) -> ErrorType:
        if error_type is None:
            error_type = self._classify_error(error)

        self._log_error(error, error_type, context)
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

        if error_type in self.error_callbacks:
            try:
                self.error_callbacks[error_type](error, context)
            except Exception as callback_error:
                logger.error(f"❌ 错误回调执行失败: {callback_error}")

        return error_type

    def _classify_error(self, error: Exception) -> ErrorType:
        if isinstance(error, CryptsyError):
            return error.error_type

        elif isinstance(error, requests.exceptions.RequestException):
            return ErrorType.TRANSPORT_ERROR

        elif isinstance(error, (ConnectionError, TimeoutError)):
            return ErrorType.TRANSPORT_ERROR

        elif isinstance(error, json.JSONDecodeError):
            return ErrorType.PARSE_ERROR

        else:
            return ErrorType.UNKNOWN_ERROR

    def _log_error(self, error: Exception, error_type: ErrorType, context: str):
        error_msg = f"[{error_type.value}] {context}: {str(error)}"

        if error_type == ErrorType.CONFIGURATION_ERROR:
            logger.critical(error_msg)
        elif error_type in [ErrorType.TRANSPORT_ERROR, ErrorType.PARSE_ERROR, ErrorType.UNKNOWN_ERROR]:
            logger.error(error_msg)
        else:
            logger.warning(error_msg)

        if logger.isEnabledFor(logging.DEBUG) and error.__traceback__ is not None:
            logger.debug("错误堆栈:\n" + "".join(traceback.format_exception(type(error), error, error.__traceback__)))

    def reset_error_count(self, error_type: Optional[ErrorType] = None):
        if error_type:
            self.error_counts[error_type] = 0
        else:
            self.error_counts.clear()

    def get_error_count(self, error_type: ErrorType) -> int:
        return self.error_counts.get(error_type, 0)


global_error_handler = ErrorHandler()


def default_transport_error_callback(error: Exception, context: str):
    logger.warning(f"🌐 网络错误，请检查连接或代理设置: {context}")


def default_api_error_callback(error: Exception, context: str):
    if 'nonce' in str(error).lower():
        logger.warning(f"🔐 Nonce被拒绝，同一API Key可能被多个客户端同时使用: {context}")


global_error_handler.register_error_callback(ErrorType.TRANSPORT_ERROR, default_transport_error_callback)
global_error_handler.register_error_callback(ErrorType.API_ERROR, default_api_error_callback)
