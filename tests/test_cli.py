import json

import pytest

from cryptsy import cli
from cryptsy.utils.error_handler import ErrorHandler, ErrorType

from conftest import FakeTransport


@pytest.fixture
def fake_client(monkeypatch):
    transport = FakeTransport({'success': 1, 'return': {'markets': {}}})
    real_create_client = cli.create_client

    def create(settings):
        return real_create_client(settings, transport=transport, error_handler=ErrorHandler())

    monkeypatch.setattr(cli, 'create_client', create)
    return transport


@pytest.fixture
def error_handler(monkeypatch):
    handler = ErrorHandler()
    monkeypatch.setattr(cli, 'global_error_handler', handler)
    return handler


def test_parse_params():
    assert cli.parse_params(['marketid=3', 'note=a=b']) == {'marketid': '3', 'note': 'a=b'}
    with pytest.raises(ValueError):
        cli.parse_params(['marketid'])


def test_main_prints_result(fake_client, capsys):
    assert cli.main(['marketdatav2']) == 0
    assert json.loads(capsys.readouterr().out) == {'markets': {}}
    assert fake_client.requests[0].method == 'GET'


def test_main_missing_credentials_is_configuration_error(fake_client, error_handler, monkeypatch, caplog):
    monkeypatch.delenv('CRYPTSY_API_KEY', raising=False)
    monkeypatch.delenv('CRYPTSY_API_SECRET', raising=False)

    assert cli.main(['getinfo']) == 1

    assert fake_client.requests == []
    assert error_handler.get_error_count(ErrorType.CONFIGURATION_ERROR) == 1
    assert '[configuration_error]' in caplog.text
    assert 'CRYPTSY_API_KEY' in caplog.text


def test_main_invalid_timeout_is_configuration_error(fake_client, error_handler, monkeypatch):
    monkeypatch.setenv('CRYPTSY_TIMEOUT', 'soon')

    assert cli.main(['marketdatav2']) == 1
    assert error_handler.get_error_count(ErrorType.CONFIGURATION_ERROR) == 1
    assert fake_client.requests == []


def test_main_bad_param_is_not_configuration_error(fake_client, error_handler):
    assert cli.main(['depth', 'marketid']) == 1
    assert error_handler.get_error_count(ErrorType.CONFIGURATION_ERROR) == 0


def test_main_invalid_method(fake_client):
    assert cli.main(['bogus']) == 1
    assert fake_client.requests == []
