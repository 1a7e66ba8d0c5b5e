# -*- coding: utf-8 -*-

import pytest
import requests.exceptions

from vow.network import errors, Response


class TestHTTPStatusError(object):

    @pytest.mark.parametrize('code, err_class', [
        (400, errors.HTTPBadRequestError),
        (401, errors.HTTPUnauthorizedError),
        (403, errors.HTTPForbiddenError),
        (404, errors.HTTPNotFoundError),
        (413, errors.HTTPEntityTooLargeError),
        (500, errors.HTTPInternalServerError),
        (501, errors.HTTPNotImplementedError),
        (503, errors.HTTPServiceUnavailableError)])
    def test_from_code(self, code, err_class):
        err = errors.HTTPStatusError.from_code(code, 'Status')
        assert type(err) is err_class
        assert err.code == code
        assert err.status_text == 'Status'

    def test_from_unknown_code(self):
        err = errors.HTTPStatusError.from_code(418, "I'm a teapot")
        assert type(err) is errors.HTTPStatusError
        assert '418' in err.message
        assert "I'm a teapot" in str(err)

    def test_from_response(self):
        response = Response(500, 'Internal Server Error', content=b'Oops',
                            url='http://example.com/')
        err = errors.HTTPStatusError.from_response(response)

        assert isinstance(err, errors.HTTPInternalServerError)
        assert err.response is response
        assert 'http://example.com/' in repr(err)
        assert 'Oops' in repr(err)


class TestNetworkError(object):

    def test_message_args(self):
        err = errors.NetworkError(None, 'Error on %(x)s', {'x': 'here'})
        assert err.message == 'Error on here'
        assert str(err) == 'Error on here'
        assert repr(err) == 'NetworkError("Error on here")'

    def test_default_message(self):
        assert errors.NetworkError().message

    def test_families(self):
        assert issubclass(errors.ConnectionError, errors.TransportError)
        assert issubclass(errors.TimeoutError, errors.TransportError)
        assert not issubclass(errors.HTTPStatusError, errors.TransportError)
        assert not issubclass(errors.TransportError, errors.HTTPStatusError)


class TestHandler(object):

    @pytest.mark.parametrize('raised, expected', [
        (requests.exceptions.ConnectionError(), errors.ConnectionError),
        (requests.exceptions.ConnectTimeout(), errors.ConnectionError),
        (requests.exceptions.ReadTimeout(), errors.TimeoutError),
        (requests.exceptions.TooManyRedirects(), errors.TransportError),
        (requests.exceptions.InvalidURL(), errors.TransportError)])
    def test_convert_requests_errors(self, raised, expected):
        @errors.handler
        def f():
            raise raised

        with pytest.raises(expected) as exc_info:
            f()
        assert exc_info.value.reason is raised

    def test_other_errors_are_not_converted(self):
        @errors.handler
        def f():
            raise KeyError()

        with pytest.raises(KeyError):
            f()

    def test_result_is_transmitted(self):
        @errors.handler
        def f(x):
            return x * 2

        assert f(4) == 8
