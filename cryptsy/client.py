"""Cryptsy REST API客户端"""
import asyncio
import logging
import platform
import threading
import time
from typing import AbstractSet, Any, Dict, Mapping, Optional

from .auth import CryptsyAuth, encode_params
from .methods import PRIVATE_METHODS, PUBLIC_METHODS, MethodType, classify
from .response import Err, Result, normalize_response
from .transport import HttpRequest, RequestsTransport, Transport
from .utils.error_handler import ErrorHandler, InvalidMethodError, global_error_handler

logger = logging.getLogger('cryptsy')

PUBLIC_API_URL = 'http://pubapi.cryptsy.com/api.php?'
PRIVATE_API_URL = 'https://api.cryptsy.com/api'


def default_user_agent() -> str:
    return f"Mozilla/4.0 (compatible; Cryptsy API Python client; Python/{platform.python_version()})"


class NonceCounter:
    """严格递增的nonce计数器，取值和自增在同一把锁内完成"""

    def __init__(self, seed: Optional[int] = None):
        self._value = int(time.time()) if seed is None else seed
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def current(self) -> int:
        return self._value


class CryptsyClient:
    """Cryptsy API客户端

    公共接口走 GET + 查询字符串，私有接口走 POST + 签名表单。
    每次调用返回 Ok 或 Err，不抛出也不重试。
    """

    def __init__(self, api_key: str, api_secret: str,
                 transport_options: Optional[Mapping[str, Any]] = None,
                 *,
                 transport: Optional[Transport] = None,
                 public_url: str = PUBLIC_API_URL,
                 private_url: str = PRIVATE_API_URL,
                 user_agent: Optional[str] = None,
                 public_methods: AbstractSet[str] = PUBLIC_METHODS,
                 private_methods: AbstractSet[str] = PRIVATE_METHODS,
                 error_handler: Optional[ErrorHandler] = None):
        overlap = set(public_methods) & set(private_methods)
        if overlap:
            raise ValueError(f"公共接口和私有接口方法表重叠: {sorted(overlap)}")

        self.auth = CryptsyAuth(api_key, api_secret)
        self.transport_options = dict(transport_options or {})
        self.transport = transport or RequestsTransport()
        self.public_url = public_url
        self.private_url = private_url
        self.user_agent = user_agent or default_user_agent()
        self.public_methods = frozenset(public_methods)
        self.private_methods = frozenset(private_methods)
        self.error_handler = error_handler or global_error_handler
        self.nonce = NonceCounter()

        logger.info(f"🔒 Cryptsy客户端已初始化: public={public_url} private={private_url}")

    def classify(self, method: str) -> MethodType:
        return classify(method, self.public_methods, self.private_methods)

    def build_request(self, method: str, params: Optional[Mapping[str, Any]] = None) -> HttpRequest:
        """
        构建HTTP请求

        Args:
            method: API方法名
            params: 方法参数，按传入顺序编码

        Returns:
            待发送的请求

        Raises:
            InvalidMethodError: 方法名不在方法表中（此时不会消耗nonce）
        """
        method_type = self.classify(method)
        if method_type is MethodType.INVALID:
            raise InvalidMethodError(method)

        request_params: Dict[str, Any] = dict(params or {})
        request_params['method'] = method
        request_params['nonce'] = self.nonce.next()
        encoded = encode_params(request_params)

        if method_type is MethodType.PUBLIC:
            return HttpRequest(
                method='GET',
                url=self.public_url + encoded,
                headers={'User-Agent': self.user_agent},
                options=self.transport_options,
            )

        # 请求体和签名内容是同一个字符串
        headers = self.auth.auth_headers(encoded)
        headers['User-Agent'] = self.user_agent
        headers['Content-Type'] = 'application/x-www-form-urlencoded'
        return HttpRequest(
            method='POST',
            url=self.private_url,
            headers=headers,
            body=encoded,
            options=self.transport_options,
        )

    def call(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Result:
        """调用API方法，返回 Ok(数据) 或 Err(错误)"""
        try:
            request = self.build_request(method, params)
        except InvalidMethodError as e:
            self.error_handler.handle_error(e, method)
            return Err(e)

        logger.debug(f"🔒 发送请求: {request.method} {method}")
        result = normalize_response(self.transport.send(request))

        if isinstance(result, Err):
            self.error_handler.handle_error(result.error, f"{request.method} {method}")
        else:
            logger.debug(f"✅ 请求成功: {method}")
        return result

    async def call_async(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Result:
        """异步版本，在线程中执行阻塞的HTTP请求"""
        return await asyncio.to_thread(self.call, method, params)

    # 公共接口

    def market_data(self, v2: bool = True) -> Result:
        return self.call('marketdatav2' if v2 else 'marketdata')

    def single_market_data(self, marketid: int) -> Result:
        return self.call('singlemarketdata', {'marketid': marketid})

    def order_data(self) -> Result:
        return self.call('orderdata')

    def single_order_data(self, marketid: int) -> Result:
        return self.call('singleorderdata', {'marketid': marketid})

    # 私有接口：账户

    def get_info(self) -> Result:
        return self.call('getinfo')

    def get_markets(self) -> Result:
        return self.call('getmarkets')

    def my_transactions(self) -> Result:
        return self.call('mytransactions')

    def generate_new_address(self, currencyid: Optional[int] = None,
                             currencycode: Optional[str] = None) -> Result:
        if currencyid is None and currencycode is None:
            raise ValueError("currencyid 和 currencycode 至少需要一个")
        params: Dict[str, Any] = {}
        if currencyid is not None:
            params['currencyid'] = currencyid
        if currencycode is not None:
            params['currencycode'] = currencycode
        return self.call('generatenewaddress', params)

    # 私有接口：市场与成交

    def market_trades(self, marketid: int) -> Result:
        return self.call('markettrades', {'marketid': marketid})

    def market_orders(self, marketid: int) -> Result:
        return self.call('marketorders', {'marketid': marketid})

    def depth(self, marketid: int) -> Result:
        return self.call('depth', {'marketid': marketid})

    def my_trades(self, marketid: int, limit: int = 200) -> Result:
        return self.call('mytrades', {'marketid': marketid, 'limit': limit})

    def all_my_trades(self, startdate: Optional[str] = None, enddate: Optional[str] = None) -> Result:
        """startdate / enddate 格式为 YYYY-MM-DD"""
        params: Dict[str, Any] = {}
        if startdate:
            params['startdate'] = startdate
        if enddate:
            params['enddate'] = enddate
        return self.call('allmytrades', params)

    # 私有接口：订单

    def my_orders(self, marketid: int) -> Result:
        return self.call('myorders', {'marketid': marketid})

    def all_my_orders(self) -> Result:
        return self.call('allmyorders')

    def create_order(self, marketid: int, ordertype: str, quantity: Any, price: Any) -> Result:
        """ordertype 为 Buy 或 Sell，成功时返回包含 orderid 的对象"""
        return self.call('createorder', {
            'marketid': marketid,
            'ordertype': ordertype,
            'quantity': quantity,
            'price': price,
        })

    def cancel_order(self, orderid: int) -> Result:
        return self.call('cancelorder', {'orderid': orderid})

    def cancel_market_orders(self, marketid: int) -> Result:
        return self.call('cancelmarketorders', {'marketid': marketid})

    def cancel_all_orders(self) -> Result:
        return self.call('cancelallorders')

    def calculate_fees(self, ordertype: str, quantity: Any, price: Any) -> Result:
        return self.call('calculatefees', {
            'ordertype': ordertype,
            'quantity': quantity,
            'price': price,
        })
