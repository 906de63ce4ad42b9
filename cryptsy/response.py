"""响应解析模块

把服务端各种形态的响应统一成 Ok / Err 两种结果。
"""
import json
import math
from dataclasses import dataclass
from typing import Any, Union

from .transport import TransportResponse
from .utils.error_handler import (
    ApiError,
    CryptsyError,
    ParseError,
    TransportError,
    UnknownError,
)


@dataclass(frozen=True)
class Ok:
    value: Any

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Err:
    error: CryptsyError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error


Result = Union[Ok, Err]


def coerce_success(value: Any) -> bool:
    """
    兼容层：按数值真值判断 success 字段

    服务端的 success 可能是 1、"1"、true、"0" 等不同写法，
    这里统一按“转成整数后是否非零”处理：
    布尔值按 0/1，数字向零取整，字符串先去空白再按数字解析（解析失败或空串视为0），
    其它类型一律为0。
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return False
        try:
            value = float(text)
        except ValueError:
            return False
    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return False
        return int(value) != 0
    return False


def parse_payload(data: Any) -> Result:
    """根据解析后的JSON判断成功或失败"""
    if isinstance(data, dict):
        # 已知的两种成功结构：{success: 1, return: ...} 以及下单接口直接返回的 {orderid: ...}
        if (coerce_success(data.get('success')) and 'return' in data) or 'orderid' in data:
            return Ok(data['return'] if 'return' in data else data)

        if data.get('error'):
            return Err(ApiError(str(data['error'])))

    return Err(UnknownError(data))


def normalize_response(response: TransportResponse) -> Result:
    if response.error is not None:
        return Err(TransportError(response.error))

    try:
        data = json.loads(response.body)
    except (TypeError, ValueError):
        return Err(ParseError(response.body))

    return parse_payload(data)
