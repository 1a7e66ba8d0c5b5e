# -*- coding: utf-8 -*-

import json
import logging

from ..promise import Promise
from . import errors

_logger = logging.getLogger(__name__)


class Response(object):
    """Raw response of an HTTP request.

    Obtaining a Response means the exchange with the server has succeeded,
    whatever is the status code. The `ok` attribute tells if the status code
    is a success (2xx); the caller decides what to do of the others.

    Attributes:
        status_code (int): HTTP status code.
        reason (str): HTTP status text.
        headers (dict): HTTP headers of the response.
        url (str): final URL of the response.
        content (bytes): raw body.
        encoding (str): encoding used to decode the body as text.
        scheduler (Scheduler): scheduler of the Promises returned by `text()`
            and `json()`. If None, the default scheduler is used.
    """

    def __init__(self, status_code, reason=None, headers=None, content=b'',
                 url=None, encoding=None, scheduler=None):
        self.status_code = status_code
        self.reason = reason
        self.headers = headers if headers is not None else {}
        self.url = url
        self.content = content or b''
        self.encoding = encoding or 'utf-8'
        self.scheduler = scheduler

    @property
    def ok(self):
        """boolean: True if the status code is in range [200, 300)."""
        return 200 <= self.status_code < 300

    def raise_for_status(self):
        """Raise an HTTPStatusError if the status code is not a success.

        Raises:
            HTTPStatusError: the error matching the status code.
        """
        if not self.ok:
            raise errors.HTTPStatusError.from_response(self)

    def text(self):
        """Decode the body as text.

        Returns:
            Promise<str>: the body content. The Promise is rejected with a
                DecodeError if the content can't be decoded.
        """
        def decode(resolve, reject):
            try:
                resolve(self._decode())
            except (LookupError, ValueError) as error:
                reject(errors.DecodeError(error, self.url))

        return Promise(decode, _name='TEXT %s' % self.url,
                       scheduler=self.scheduler)

    def json(self):
        """Decode the body as JSON.

        An empty body is decoded as None.

        Returns:
            Promise<*>: the decoded value. The Promise is rejected with a
                DecodeError if the content is not valid JSON.
        """
        def decode(resolve, reject):
            try:
                text = self._decode()
                resolve(json.loads(text) if text else None)
            except (LookupError, ValueError) as error:
                _logger.debug('Invalid JSON response from %s', self.url)
                reject(errors.DecodeError(error, self.url))

        return Promise(decode, _name='JSON %s' % self.url,
                       scheduler=self.scheduler)

    def _decode(self):
        return self.content.decode(self.encoding)

    def __repr__(self):
        return '<Response [%s] %s>' % (self.status_code, self.url)
