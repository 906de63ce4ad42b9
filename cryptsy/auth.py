"""Cryptsy API认证模块"""
import hashlib
import hmac
import math
from decimal import Decimal
from typing import Any, Dict, Mapping, Union
from urllib.parse import quote, urlencode

# 与 encodeURIComponent 一致：字母数字和 -_.~ 之外，这几个字符也不转义
QUERY_SAFE_CHARS = "!'()*"


def _format_float(value: float) -> str:
    """按 JavaScript Number 的规则输出：1e-6 到 1e21 之间不用科学计数法"""
    if not math.isfinite(value):
        return ''
    if value == 0:
        return '0'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        return format(Decimal(text), 'f')

    mantissa, exponent = text.split('e')
    exponent_value = int(exponent)
    return f"{mantissa}e{'+' if exponent_value > 0 else '-'}{abs(exponent_value)}"


def render_value(value: Any) -> str:
    """把标量参数转成字符串：布尔值小写，None 为空串，小数不用科学计数法"""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, Decimal):
        return format(value, 'f') if value.is_finite() else ''
    return str(value)


def encode_params(params: Mapping[str, Any]) -> str:
    """
    按参数原有顺序编码为 application/x-www-form-urlencoded 字符串

    私有接口的请求体和签名内容都来自这里，两者必须逐字节一致，
    所以不能排序，也不能交给HTTP库再编码一次。空格编码为 %20。
    """
    items = [(str(key), render_value(value)) for key, value in params.items()]
    return urlencode(items, safe=QUERY_SAFE_CHARS, quote_via=quote)


def sign(message: Union[str, bytes], secret: Union[str, bytes]) -> str:
    """
    生成HMAC-SHA512签名

    Args:
        message: 待签名内容（编码后的参数字符串）
        secret: API Secret

    Returns:
        128位小写十六进制签名
    """
    if isinstance(message, str):
        message = message.encode('utf-8')
    if isinstance(secret, str):
        secret = secret.encode('utf-8')
    return hmac.new(secret, message, hashlib.sha512).hexdigest()


class CryptsyAuth:
    """Cryptsy API认证工具类"""

    def __init__(self, api_key: str, api_secret: str):
        self.api_key = api_key
        self._api_secret = api_secret

    def __repr__(self) -> str:
        return f"CryptsyAuth(api_key={self.api_key[:4]}***)"

    def generate_signature(self, message: Union[str, bytes]) -> str:
        return sign(message, self._api_secret)

    def auth_headers(self, message: Union[str, bytes]) -> Dict[str, str]:
        """私有接口认证头：Sign 为请求体签名，Key 为API Key"""
        return {
            'Sign': self.generate_signature(message),
            'Key': self.api_key,
        }
