from unittest import mock

import certifi
import pytest
import requests

from cryptsy.transport import HttpRequest, RequestsTransport, Transport, merge_request_options


def test_merge_request_options_core_wins():
    defaults = {'timeout': 10, 'method': 'GET', 'headers': {'A': '1'}, 'verify': False}
    core = {'method': 'POST', 'url': 'https://x/api', 'headers': {'Key': 'k'}, 'data': 'a=1'}

    merged = merge_request_options(defaults, core)

    assert merged == {'timeout': 10, 'verify': False, 'method': 'POST',
                      'url': 'https://x/api', 'headers': {'Key': 'k'}, 'data': 'a=1'}
    assert defaults['method'] == 'GET'


def test_merge_request_options_without_defaults():
    assert merge_request_options(None, {'method': 'GET'}) == {'method': 'GET'}


def test_requests_transport_sends_body_verbatim():
    request = HttpRequest('POST', 'https://x/api', {'Sign': 'abc'}, 'method=getinfo&nonce=1', {'timeout': 3})
    fake_response = mock.Mock(status_code=200, text='{"success":1,"return":[]}')

    with mock.patch('cryptsy.transport.requests.request', return_value=fake_response) as send:
        response = RequestsTransport().send(request)

    send.assert_called_once_with(
        method='POST', url='https://x/api', headers={'Sign': 'abc'},
        data='method=getinfo&nonce=1', timeout=3, verify=certifi.where(),
    )
    assert response.status_code == 200
    assert response.body == '{"success":1,"return":[]}'
    assert response.error is None


def test_requests_transport_keeps_caller_verify():
    request = HttpRequest('GET', 'http://x/api.php?method=orderdata', {}, options={'verify': False})
    with mock.patch('cryptsy.transport.requests.request') as send:
        RequestsTransport().send(request)
    assert send.call_args.kwargs['verify'] is False


def test_requests_transport_returns_error():
    error = requests.exceptions.ConnectionError('refused')
    request = HttpRequest('GET', 'http://x/api.php?method=orderdata', {})

    with mock.patch('cryptsy.transport.requests.request', side_effect=error):
        response = RequestsTransport().send(request)

    assert response.error is error
    assert response.status_code is None


def test_transport_without_send_cannot_be_created():
    class IncompleteTransport(Transport):
        pass

    with pytest.raises(TypeError):
        IncompleteTransport()
