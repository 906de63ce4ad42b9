"""API方法注册表与分类"""
from enum import Enum
from typing import AbstractSet


class MethodType(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    INVALID = "invalid"


# 公共接口：行情数据，无需认证
PUBLIC_METHODS = frozenset([
    'marketdata',
    'marketdatav2',
    'singlemarketdata',
    'orderdata',
    'singleorderdata',
])

# 私有接口：账户、订单相关，需要签名
PRIVATE_METHODS = frozenset([
    'getinfo',
    'getmarkets',
    'mytransactions',
    'markettrades',
    'marketorders',
    'mytrades',
    'allmytrades',
    'myorders',
    'depth',
    'allmyorders',
    'createorder',
    'cancelorder',
    'cancelmarketorders',
    'cancelallorders',
    'calculatefees',
    'generatenewaddress',
])


def classify(method: str,
             public_methods: AbstractSet[str] = PUBLIC_METHODS,
             private_methods: AbstractSet[str] = PRIVATE_METHODS) -> MethodType:
    """判断方法属于公共接口、私有接口还是无效方法"""
    if method in public_methods:
        return MethodType.PUBLIC
    if method in private_methods:
        return MethodType.PRIVATE
    return MethodType.INVALID
