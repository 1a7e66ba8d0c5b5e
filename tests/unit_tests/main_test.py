# -*- coding: utf-8 -*-

import pytest

import vow
from vow.network import errors, Response, Service, Transport


class StaticTransport(Transport):
    """Transport always giving the same result."""

    def __init__(self, result):
        self.result = result

    def send(self, request):
        if isinstance(self.result, Exception):
            raise self.result
        self.result.url = request.url
        return self.result


def _show(result, endpoint='/posts/1'):
    with Service('http://example.com', StaticTransport(result)) as service:
        return vow.show_resource(service, endpoint).result(1)


class TestShowResource(object):

    def test_json_resource(self, capsys):
        response = Response(200, 'OK', content=b'{"id": 1}')
        assert _show(response) == 0

        out = capsys.readouterr().out
        assert '200 OK' in out
        assert "{'id': 1}" in out

    def test_text_resource(self, capsys):
        response = Response(200, 'OK', content=b'plain text')
        assert _show(response) == 0
        assert 'plain text' in capsys.readouterr().out

    def test_error_status(self, capsys):
        assert _show(Response(404, 'Not Found')) == 2
        assert '404 Not Found' in capsys.readouterr().out

    def test_transport_error(self):
        assert _show(errors.ConnectionError(None)) == 1


class TestMain(object):

    @pytest.fixture
    def fake_network(self, monkeypatch):
        """Replace the default transport by a static one."""
        transport = StaticTransport(Response(200, 'OK', content=b'[]'))
        monkeypatch.setattr(vow.network.service, 'RequestsTransport',
                            lambda: transport)
        monkeypatch.setattr(vow.config, 'load', lambda: None)
        return transport

    def test_main(self, fake_network, capsys):
        assert vow.main(['http://example.com/items']) == 0
        out = capsys.readouterr().out
        assert '200 OK' in out
        assert fake_network.result.url == 'http://example.com/items'

    def test_main_default_endpoint(self, fake_network):
        assert vow.main([]) == 0
        assert fake_network.result.url == \
            'https://jsonplaceholder.typicode.com/posts/1'
