"""工具模块"""
from .logger import setup_logger, SensitiveDataFilter
from .error_handler import (
    ErrorType,
    ErrorHandler,
    CryptsyError,
    InvalidMethodError,
    TransportError,
    ParseError,
    ApiError,
    UnknownError,
    global_error_handler
)

__all__ = [
    'setup_logger',
    'SensitiveDataFilter',
    'ErrorType',
    'ErrorHandler',
    'CryptsyError',
    'InvalidMethodError',
    'TransportError',
    'ParseError',
    'ApiError',
    'UnknownError',
    'global_error_handler'
]
