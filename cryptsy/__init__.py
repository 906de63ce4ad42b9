from .auth import CryptsyAuth, encode_params, sign
from .client import CryptsyClient, NonceCounter, PRIVATE_API_URL, PUBLIC_API_URL
from .methods import MethodType, PRIVATE_METHODS, PUBLIC_METHODS, classify
from .response import Err, Ok, Result, normalize_response
from .transport import HttpRequest, RequestsTransport, Transport, TransportResponse, merge_request_options
from .utils.error_handler import (
    ApiError,
    CryptsyError,
    ErrorType,
    InvalidMethodError,
    ParseError,
    TransportError,
    UnknownError,
)
from .config import Settings, create_client

__all__ = [
    'CryptsyClient', 'CryptsyAuth', 'NonceCounter', 'PUBLIC_API_URL', 'PRIVATE_API_URL',
    'encode_params', 'sign',
    'MethodType', 'PUBLIC_METHODS', 'PRIVATE_METHODS', 'classify',
    'Ok', 'Err', 'Result', 'normalize_response',
    'HttpRequest', 'Transport', 'RequestsTransport', 'TransportResponse', 'merge_request_options',
    'CryptsyError', 'ErrorType', 'InvalidMethodError', 'TransportError', 'ParseError',
    'ApiError', 'UnknownError',
    'Settings', 'create_client',
]
