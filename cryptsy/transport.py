"""HTTP传输层

客户端只依赖 Transport.send 这一个能力：发送请求，拿回状态码/响应体/错误。
默认实现基于 requests，测试或其它HTTP库可以注入自己的实现。
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import certifi
import requests

logger = logging.getLogger('cryptsy')

# 由客户端计算、不允许被调用方默认参数覆盖的字段
CORE_REQUEST_FIELDS = ('method', 'url', 'headers', 'data')


def merge_request_options(defaults: Optional[Mapping[str, Any]],
                          core: Mapping[str, Any]) -> Dict[str, Any]:
    """
    合并调用方的传输参数和客户端计算出的请求字段

    优先级：core 中的字段（method/url/headers/data）总是覆盖 defaults 中的同名字段，
    defaults 中的其它字段（timeout、proxies、verify 等）原样透传。两个输入都不会被修改。
    """
    merged = dict(defaults or {})
    merged.update(core)
    return merged


@dataclass(frozen=True)
class HttpRequest:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def to_kwargs(self) -> Dict[str, Any]:
        return merge_request_options(self.options, {
            'method': self.method,
            'url': self.url,
            'headers': dict(self.headers),
            'data': self.body,
        })


@dataclass(frozen=True)
class TransportResponse:
    status_code: Optional[int] = None
    body: str = ''
    error: Optional[BaseException] = None


class Transport(ABC):
    """传输层接口"""

    @abstractmethod
    def send(self, request: HttpRequest) -> TransportResponse:
        raise NotImplementedError


class RequestsTransport(Transport):
    """基于 requests 的默认传输实现

    每次请求单独发出，不复用连接，也不重试。
    """

    def __init__(self, verify: Any = None):
        self.verify = certifi.where() if verify is None else verify

    def send(self, request: HttpRequest) -> TransportResponse:
        kwargs = request.to_kwargs()
        kwargs.setdefault('verify', self.verify)

        try:
            response = requests.request(**kwargs)
        except requests.exceptions.RequestException as e:
            return TransportResponse(error=e)

        logger.debug(f"📥 收到响应: {request.method} {request.url.split('?')[0]} - {response.status_code}")
        return TransportResponse(status_code=response.status_code, body=response.text)
