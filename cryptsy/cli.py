"""Cryptsy API命令行入口

用法: cryptsy <method> [key=value ...]  或  python -m cryptsy <method> [key=value ...]
"""
import argparse
import json
from typing import Dict, List, Optional

from .config import Settings, create_client
from .methods import MethodType
from .utils.error_handler import ErrorType, global_error_handler
from .utils.logger import setup_logger

settings = Settings()
logger = setup_logger('cryptsy', settings.get_log_level())


def parse_params(pairs: List[str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for pair in pairs:
        if '=' not in pair:
            raise ValueError(f"参数格式应为 key=value: {pair}")
        key, value = pair.split('=', 1)
        params[key] = value
    return params


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='cryptsy', description='调用 Cryptsy API 方法并输出JSON结果')
    parser.add_argument('method', help='API方法名，如 marketdatav2、getinfo')
    parser.add_argument('params', nargs='*', help='方法参数，格式 key=value')
    args = parser.parse_args(argv)

    try:
        params = parse_params(args.params)
    except ValueError as e:
        logger.error(f"❌ {e}")
        return 1

    try:
        client = create_client(settings)
        if client.classify(args.method) is MethodType.PRIVATE:
            settings.validate()
    except ValueError as e:
        global_error_handler.handle_error(e, f"配置错误: {args.method}", ErrorType.CONFIGURATION_ERROR)
        return 1

    result = client.call(args.method, params)
    if not result.is_ok:
        logger.error(f"❌ 调用失败: {args.method} - {result.error}")
        return 1

    print(json.dumps(result.value, ensure_ascii=False, indent=2))
    return 0
