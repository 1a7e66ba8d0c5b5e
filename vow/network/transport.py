# -*- coding: utf-8 -*-

import logging

import requests
from requests import __version__ as requests_version

from .. import __version__ as vow_version
from . import errors
from .response import Response

_logger = logging.getLogger(__name__)


class Transport(object):
    """Performs the byte-level exchange of a request.

    `send()` is blocking: it's executed in a worker thread by the Service.
    """

    def send(self, request):
        """Send a request and wait for the response.

        Args:
            request (Request)
        Returns:
            Response: the response, whatever is its status code.
        Raises:
            TransportError: no response has been obtained.
        """
        raise NotImplementedError()

    def close(self):
        """Release the resources."""
        pass


class RequestsTransport(Transport):
    """Transport using the requests library."""

    def __init__(self, session=None):
        """
        Args:
            session (requests.Session, optional): session used for all
                requests. By default, a new session is created, and closed
                by `close()`.
        """
        self._own_session = session is None
        self._session = session or self._prepare_session()

    @staticmethod
    def _prepare_session():
        """Prepare a session to send an HTTP(S) request.

        Returns:
            requests.Session: new HTTP(s) session
        """
        session = requests.Session()
        session.headers.update({
            'User-Agent': 'vow/%s python-requests/%s' % (
                vow_version, requests_version)
        })
        return session

    @errors.handler
    def send(self, request):
        _logger.log(5, 'Start request %s', request)
        response = self._session.request(method=request.verb, url=request.url,
                                         headers=request.headers,
                                         data=request.body,
                                         timeout=request.timeout)

        _logger.log(5, 'request %s -> %s', request, response.status_code)

        return Response(response.status_code, reason=response.reason,
                        headers=response.headers,
                        content=response.content, url=response.url,
                        encoding=response.encoding)

    def close(self):
        if self._own_session:
            self._session.close()
