# -*- coding: utf-8 -*-

from vow.network import Request


class TestRequest(object):

    def test_request_attributes(self):
        headers = {'Accept': 'text/plain'}
        request = Request('post', 'http://example.com/x', headers, b'data',
                          2.5)

        assert request.verb == 'POST'
        assert request.url == 'http://example.com/x'
        assert request.body == b'data'
        assert request.timeout == 2.5
        assert request.headers == headers
        assert request.headers is not headers

    def test_request_defaults(self):
        request = Request('GET', 'http://example.com/')
        assert request.headers == {}
        assert request.body is None
        assert request.timeout is None

    def test_request_repr(self):
        request = Request('delete', 'http://example.com/x')
        assert str(request) == 'DELETE http://example.com/x'
        assert repr(request) == 'Request(DELETE http://example.com/x)'
