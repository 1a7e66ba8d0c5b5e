# -*- coding: utf-8 -*-

import json

import pytest

from vow.network import errors, Request, RequestsTransport, Response


class TestRequestsTransport(object):

    def test_simple_get(self, http_server):
        transport = RequestsTransport()
        url = '%s?response=%s' % (http_server.base_uri, '{"id": 1}')

        with http_server:
            response = transport.send(Request('GET', url, timeout=1))
        transport.close()

        assert isinstance(response, Response)
        assert response.ok
        assert response.status_code == 200
        assert response.reason == 'OK'
        assert json.loads(response.content.decode('utf-8')) == {'id': 1}
        assert response.headers['content-type'] == 'application/json'

    def test_error_status_is_a_response(self, http_server):
        """A 404 is a valid response, not a transport error."""
        transport = RequestsTransport()
        url = '%s?code=404' % http_server.base_uri

        with http_server:
            response = transport.send(Request('GET', url, timeout=1))
        transport.close()

        assert not response.ok
        assert response.status_code == 404

    def test_post_body_and_headers(self, http_server):
        transport = RequestsTransport()
        request = Request('post', http_server.base_uri + 'items',
                          headers={'Content-Type': 'text/plain'},
                          body='hello', timeout=1)

        with http_server:
            response = transport.send(request)
        transport.close()

        echo = json.loads(response.content.decode('utf-8'))
        assert echo == {'method': 'POST', 'path': '/items',
                        'content_type': 'text/plain', 'body': 'hello'}

    def test_user_agent(self, http_server):
        headers = []

        def do_GET(handler):
            headers.append(handler.headers.get('User-Agent'))
            handler.send_response(204)
            handler.end_headers()

        http_server.handler.do_GET = do_GET
        transport = RequestsTransport()
        with http_server:
            transport.send(Request('GET', http_server.base_uri, timeout=1))
        transport.close()

        assert headers[0].startswith('vow/')

    def test_connection_error(self, http_server):
        transport = RequestsTransport()
        url = http_server.base_uri
        http_server.close()  # Nothing listens to this address anymore.

        with pytest.raises(errors.ConnectionError) as exc_info:
            transport.send(Request('GET', url, timeout=1))
        transport.close()

        assert isinstance(exc_info.value, errors.TransportError)
        assert exc_info.value.reason is not None

    def test_timeout_error(self, http_server):
        transport = RequestsTransport()
        url = '%s?sleep=0.5' % http_server.base_uri

        with http_server:
            with pytest.raises(errors.TransportError):
                transport.send(Request('GET', url, timeout=0.05))
        transport.close()

    def test_invalid_url(self):
        transport = RequestsTransport()
        with pytest.raises(errors.TransportError):
            transport.send(Request('GET', 'not-an-url://', timeout=1))
        transport.close()

    def test_external_session_is_not_closed(self):
        class SessionMock(object):
            closed = False

            def close(self):
                self.closed = True

        session = SessionMock()
        RequestsTransport(session).close()
        assert not session.closed
