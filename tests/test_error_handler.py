import json
import logging

import requests

from cryptsy.utils.error_handler import (
    ApiError,
    ErrorHandler,
    ErrorType,
    InvalidMethodError,
    ParseError,
    TransportError,
    UnknownError,
)


def test_classify_errors():
    handler = ErrorHandler()
    assert handler._classify_error(InvalidMethodError('x')) is ErrorType.INVALID_METHOD
    assert handler._classify_error(TransportError(OSError('x'))) is ErrorType.TRANSPORT_ERROR
    assert handler._classify_error(ParseError('x')) is ErrorType.PARSE_ERROR
    assert handler._classify_error(ApiError('x')) is ErrorType.API_ERROR
    assert handler._classify_error(UnknownError({})) is ErrorType.UNKNOWN_ERROR
    assert handler._classify_error(requests.exceptions.Timeout()) is ErrorType.TRANSPORT_ERROR
    assert handler._classify_error(json.JSONDecodeError('bad', 'x', 0)) is ErrorType.PARSE_ERROR
    assert handler._classify_error(RuntimeError()) is ErrorType.UNKNOWN_ERROR


def test_handle_error_counts_and_calls_back(caplog):
    handler = ErrorHandler()
    seen = []
    handler.register_error_callback(ErrorType.API_ERROR, lambda e, ctx: seen.append((str(e), ctx)))

    with caplog.at_level(logging.WARNING, logger='cryptsy'):
        assert handler.handle_error(ApiError('Invalid nonce'), 'POST getinfo') is ErrorType.API_ERROR

    assert seen == [('Invalid nonce', 'POST getinfo')]
    assert handler.get_error_count(ErrorType.API_ERROR) == 1
    assert '[api_error] POST getinfo: Invalid nonce' in caplog.text

    handler.reset_error_count(ErrorType.API_ERROR)
    assert handler.get_error_count(ErrorType.API_ERROR) == 0


def test_failing_callback_is_logged(caplog):
    handler = ErrorHandler()

    def broken(error, context):
        raise RuntimeError('boom')

    handler.register_error_callback(ErrorType.PARSE_ERROR, broken)
    with caplog.at_level(logging.ERROR, logger='cryptsy'):
        handler.handle_error(ParseError('<html>'), 'GET orderdata')

    assert '错误回调执行失败: boom' in caplog.text
    assert handler.get_error_count(ErrorType.PARSE_ERROR) == 1
