# -*- coding: utf-8 -*-
"""Network module

This module performs HTTP requests. All requests are asynchronous, executed in
separate threads. Each request returns a Promise of a `Response`.

The Promise is rejected only if no response has been obtained
(`TransportError`). Responses with an error status code are not errors: it's
up to the caller to check `response.ok`, and to raise `HTTPStatusError` if
needed.

This module uses the `config` module to find the base URL, the timeout and the
number of workers.


Examples:

    Use of the module-level functions:

    >>> with Context():
    ...     promise = request('https://jsonplaceholder.typicode.com/posts/1')
    ...     # Raises an exception if the request takes more than 10 seconds.
    ...     response = promise.result(10)
    ...     if not response.ok:
    ...         raise errors.HTTPStatusError.from_response(response)
    ...     print(response.json().result()['id'])
    1

    Use in a coroutine:

    >>> @coroutine()
    ... def get_title(service):
    ...     response = yield service.request('/posts/1')
    ...     response.raise_for_status()
    ...     post = yield response.json()
    ...     return post['title']
"""

from . import errors  # noqa
from .request import Request  # noqa
from .response import Response  # noqa
from .service import Service
from .transport import RequestsTransport, Transport  # noqa


class Context(object):
    """Start the default network service, and expose its methods."""

    def __init__(self, **kwargs):
        """
        Args:
            **kwargs: arguments passed to the Service constructor.
        """
        self._service = None
        self._kwargs = kwargs

    def start(self):
        global request, json_request

        self._service = Service(**self._kwargs)
        self._service.start()

        # Copy methods from the service instance.
        request = self._service.request
        json_request = self._service.json_request

    def stop(self):
        global request, json_request

        if self._service:
            self._service.stop()
            self._service = None

        request = None
        json_request = None

    def __enter__(self):
        self.start()
        return self._service

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()


# The context must be used to set theses methods.
request = None
json_request = None
