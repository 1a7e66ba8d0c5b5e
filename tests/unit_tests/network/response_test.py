# -*- coding: utf-8 -*-

import pytest

from vow.network import errors, Response


class TestResponse(object):

    @pytest.mark.parametrize('code, ok', [(200, True), (204, True),
                                          (299, True), (199, False),
                                          (301, False), (404, False),
                                          (500, False)])
    def test_ok(self, code, ok):
        assert Response(code).ok is ok

    def test_raise_for_status_on_success(self):
        Response(201).raise_for_status()

    def test_raise_for_status_on_error(self):
        response = Response(404, 'Not Found', url='http://example.com/x')
        with pytest.raises(errors.HTTPNotFoundError) as exc_info:
            response.raise_for_status()

        assert exc_info.value.code == 404
        assert exc_info.value.response is response

    def test_text(self):
        response = Response(200, content='café'.encode('utf-8'))
        assert response.text().result(0.01) == 'café'

    def test_text_with_encoding(self):
        response = Response(200, content='café'.encode('latin-1'),
                            encoding='latin-1')
        assert response.text().result(0.01) == 'café'

    def test_text_invalid_encoding(self):
        response = Response(200, content=b'\xff\xfe', encoding='utf-8')
        assert isinstance(response.text().exception(0.01), errors.DecodeError)

    def test_json(self):
        response = Response(200, content=b'{"id": 1, "tags": ["a"]}')
        assert response.json().result(0.01) == {'id': 1, 'tags': ['a']}

    def test_json_empty_body(self):
        assert Response(204).json().result(0.01) is None

    def test_json_invalid_content(self):
        response = Response(200, content=b'<html></html>',
                            url='http://example.com/')
        err = response.json().exception(0.01)
        assert isinstance(err, errors.DecodeError)
        assert 'http://example.com/' in err.message

    def test_json_of_error_response(self):
        """The body of an error response can be decoded too."""
        response = Response(400, content=b'{"error": "bad"}')
        assert response.json().result(0.01) == {'error': 'bad'}
