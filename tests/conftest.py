import json
from typing import Any, List, Optional

import pytest

from cryptsy import CryptsyClient, HttpRequest, Transport, TransportResponse
from cryptsy.utils.error_handler import ErrorHandler


class FakeTransport(Transport):
    """记录所有请求并返回预设响应"""

    def __init__(self, body: Any = None, error: Optional[BaseException] = None, status_code: int = 200):
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        self.body = body if body is not None else '{"success": 1, "return": []}'
        self.error = error
        self.status_code = status_code
        self.requests: List[HttpRequest] = []

    def send(self, request: HttpRequest) -> TransportResponse:
        self.requests.append(request)
        if self.error is not None:
            return TransportResponse(error=self.error)
        return TransportResponse(status_code=self.status_code, body=self.body)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> CryptsyClient:
    return CryptsyClient('my-key', 's3cr3t', transport=transport, error_handler=ErrorHandler())
