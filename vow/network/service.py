# -*- coding: utf-8 -*-

import json as json_lib
import logging

from ..common import config
from ..promise import Promise, ThreadPoolExecutor
from .request import Request
from .transport import RequestsTransport

_logger = logging.getLogger(__name__)


class Service(object):
    """HTTP network service.

    It's a "facade" pattern, providing a public interface to all
    network-related operations. Requests are sent in worker threads; each
    call returns a Promise.

    The Promise is fulfilled by any response obtained, even with an error
    status code (4xx, 5xx): check `response.ok`, or call
    `response.raise_for_status()`. It's rejected only when no response can be
    obtained (`TransportError`). Nothing is retried automatically.

    Example:

        >>> with Service('https://jsonplaceholder.typicode.com') as service:
        ...     response = service.request('/posts/1').result(10)
        ...     response.raise_for_status()
        ...     print(response.json().result()['id'])
        1
    """

    def __init__(self, base_url=None, transport=None, max_workers=None,
                 timeout=None, scheduler=None):
        """
        Args:
            base_url (str, optional): prefix of the relative endpoints.
                Default to the 'base_url' config entry.
            transport (Transport, optional): Default to a RequestsTransport.
            max_workers (int, optional): maximum number of simultaneous
                requests. Default to the 'max_workers' config entry.
            timeout (float, optional): default timeout of the requests, in
                seconds. Default to the 'request_timeout' config entry.
            scheduler (Scheduler, optional): scheduler of the Promises.
        """
        self._base_url = base_url or config.get('base_url')
        self._transport = transport or RequestsTransport()
        self._max_workers = max_workers or config.get('max_workers')
        self._timeout = timeout or config.get('request_timeout')
        self._scheduler = scheduler
        self._executor = None

    def start(self):
        _logger.debug('Start network service (%s workers)', self._max_workers)
        self._executor = ThreadPoolExecutor(self._max_workers,
                                            scheduler=self._scheduler,
                                            name='network')

    def stop(self):
        _logger.debug('Stop network service')
        if self._executor:
            self._executor.shutdown()
            self._executor = None
        self._transport.close()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def build_url(self, endpoint):
        """Make an absolute URL from an endpoint.

        Args:
            endpoint (str): absolute URL, or path relative to the base URL.
        Returns:
            str: absolute URL.
        Raises:
            ValueError: if the endpoint is relative and there is no base URL.
        """
        if '://' in endpoint:
            return endpoint
        if not self._base_url:
            raise ValueError('Relative endpoint "%s" without base URL'
                             % endpoint)
        return '%s/%s' % (self._base_url.rstrip('/'), endpoint.lstrip('/'))

    def request(self, endpoint, method='GET', headers=None, body=None,
                timeout=None):
        """Send a request.

        Args:
            endpoint (str): absolute URL, or path relative to the base URL.
            method (str, optional): HTTP verb. Default to 'GET'.
            headers (dict, optional): HTTP headers.
            body (str/bytes, optional): request content.
            timeout (float, optional): overrides the default timeout.
        Returns:
            Promise<Response>: fulfilled with the response, whatever is its
                status code. Rejected with a TransportError if the request
                has failed. Rejected with a RuntimeError if the service
                is not started, or with a ValueError if the endpoint is
                relative and there is no base URL.
        """
        if self._executor is None:
            return Promise.reject(
                RuntimeError('The network service is not started.'),
                scheduler=self._scheduler)

        try:
            url = self.build_url(endpoint)
        except ValueError as error:
            return Promise.reject(error, scheduler=self._scheduler)

        request = Request(method, url, headers, body, timeout or self._timeout)
        _logger.log(5, 'Add request %s', request)
        return self._executor.submit(self._send, request)

    def json_request(self, endpoint, method='GET', json=None, headers=None,
                     timeout=None):
        """Send a request with a JSON body.

        The body is serialized and the 'Content-Type' header is set. The
        response is not decoded: use `response.json()`.

        Args:
            endpoint (str): absolute URL, or path relative to the base URL.
            method (str, optional): HTTP verb. Default to 'GET'.
            json (optional): value to serialize in JSON. If None, the request
                has no body.
            headers (dict, optional): additional HTTP headers.
            timeout (float, optional): overrides the default timeout.
        Returns:
            Promise<Response>: see `request()`. Rejected with a TypeError if
                `json` is not serializable.
        """
        headers = dict(headers or {})
        headers.setdefault('Accept', 'application/json')
        body = None
        if json is not None:
            headers.setdefault('Content-Type', 'application/json')
            try:
                body = json_lib.dumps(json)
            except (TypeError, ValueError) as error:
                return Promise.reject(error, scheduler=self._scheduler)
        return self.request(endpoint, method, headers, body, timeout)

    def _send(self, request):
        """Executed in a worker thread."""
        response = self._transport.send(request)
        response.scheduler = self._scheduler
        _logger.log(5, 'request %s completed', request)
        return response
