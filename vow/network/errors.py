# -*- coding: utf-8 -*-
"""This module defines all errors which can occur in the network module.

requests exceptions can be converted to vow.network errors using the
``handler`` decorator.

Two families must not be confused:
- ``TransportError``: no response has been obtained (the server is
  unreachable, the connection has been lost, ...). The Promise returned by a
  request is rejected with it.
- ``HTTPStatusError``: a response has been obtained, with a non-2xx status
  code. The request itself is a success: it's up to the caller to raise this
  error (see ``Response.raise_for_status()``).

Errors have a human-readable message, ready to be displayed.
They are also more verbose when displayed using 'repr()`.
"""

import requests.exceptions


class NetworkError(Exception):
    """Base class for vow.network errors.

    Attributes:
        message (str): Human readable message, describing the error.
        reason (Exception): internal exception which've produced this error. It
            exposes the inner mechanisms of the network module, and should not
            be used outside of the network module. Can be None.
    """

    def __init__(self, reason=None, message=None, msg_args=None):
        """
        Args:
            reason (Exception, optional): base error
            message (str, optional): User-friendly message.
            msg_args (any, optional): Optional arguments used when formatting
                the message with the '%' operator. It's applied at read only.
        """
        self.reason = reason
        self._message = message or "A network error has occurred."
        self._msg_args = msg_args
        Exception.__init__(self, self.message)

    @property
    def message(self):
        if self._msg_args is not None:
            return self._message % self._msg_args
        return self._message

    def __repr__(self):
        return '%s("%s")' % (self.__class__.__name__, self.message)

    def __str__(self):
        return self.message


class TransportError(NetworkError):
    """The network exchange has not completed: there is no response."""

    def __init__(self, reason=None, message=None):
        NetworkError.__init__(self, reason,
                              message or "Unable to obtain a response.")


class ConnectionError(TransportError):
    def __init__(self, error):
        TransportError.__init__(self, error,
                                "Unable to connect to the server.")


class TimeoutError(TransportError):
    def __init__(self, error):
        TransportError.__init__(self, error,
                                "The server did not respond on time.")


class DecodeError(NetworkError):
    """The body of a response can't be decoded in the expected format."""

    def __init__(self, error, url=None):
        NetworkError.__init__(self, error,
                              "Unable to decode the response of %(url)s.",
                              {'url': url or 'the server'})


class HTTPStatusError(NetworkError):
    """Base class for HTTP errors.

    The class can be displayed for debug, using ``repr(error)``.

    Attributes:
        code (int): HTTP status code
        status_text (str): HTTP status text
        response (Response): the response, if any.
    """

    def __init__(self, code, status_text=None, response=None, message=None):
        """
        Args:
            code (int): HTTP status code.
            status_text (str, optional): HTTP status text.
            response (Response, optional): response with the error status.
            message (str, optional): User-friendly message. By default, a
                generic message mentioning the code is used.
        """
        msg_args = None
        if not message:
            message = ("The server has returned an HTTP error: "
                       "%(code)s %(reason)s")
            msg_args = {"code": code, "reason": status_text or ''}

        self.code = code
        self.status_text = status_text
        self.response = response
        NetworkError.__init__(self, None, message, msg_args)

    @classmethod
    def from_code(cls, code, status_text=None, response=None):
        """Build the error matching the status code.

        Args:
            code (int): HTTP status code.
            status_text (str, optional)
            response (Response, optional)
        Returns:
            HTTPStatusError: instance of the most specific subclass.
        """
        err_class = _code2error.get(code, HTTPStatusError)
        return err_class(code, status_text, response)

    @classmethod
    def from_response(cls, response):
        return cls.from_code(response.status_code, response.reason, response)

    def __repr__(self):
        lines = ["HTTP Error: %s %s" % (self.code, self.status_text or '')]
        if self.response is not None:
            lines.append("\tURL: %s" % self.response.url)
            lines.append("\tResponse: %r" % self.response.content[:200])
        return '\n'.join(lines)


class HTTPBadRequestError(HTTPStatusError):
    def __init__(self, code=400, status_text=None, response=None):
        message = ("The HTTP request is invalid. This is a bug, either in "
                   "the client or in the server.")
        HTTPStatusError.__init__(self, code, status_text, response, message)


class HTTPUnauthorizedError(HTTPStatusError):
    def __init__(self, code=401, status_text=None, response=None):
        message = "Authentication is required to access this resource."
        HTTPStatusError.__init__(self, code, status_text, response, message)


class HTTPForbiddenError(HTTPStatusError):
    def __init__(self, code=403, status_text=None, response=None):
        message = "You don't have the permission to do this operation."
        HTTPStatusError.__init__(self, code, status_text, response, message)


class HTTPNotFoundError(HTTPStatusError):
    def __init__(self, code=404, status_text=None, response=None):
        message = "The element you're looking for has not been found."
        HTTPStatusError.__init__(self, code, status_text, response, message)


class HTTPEntityTooLargeError(HTTPStatusError):
    def __init__(self, code=413, status_text=None, response=None):
        message = "The request content is too large."
        HTTPStatusError.__init__(self, code, status_text, response, message)


class HTTPInternalServerError(HTTPStatusError):
    def __init__(self, code=500, status_text=None, response=None):
        message = "The server has encountered an unexpected error."
        HTTPStatusError.__init__(self, code, status_text, response, message)


class HTTPNotImplementedError(HTTPStatusError):
    def __init__(self, code=501, status_text=None, response=None):
        message = ("The server does not understand or does not support "
                   "this function.")
        HTTPStatusError.__init__(self, code, status_text, response, message)


class HTTPServiceUnavailableError(HTTPStatusError):
    def __init__(self, code=503, status_text=None, response=None):
        message = ("The server is temporarily unavailable. "
                   "Please try again later.")
        HTTPStatusError.__init__(self, code, status_text, response, message)


_code2error = {
    400: HTTPBadRequestError,
    401: HTTPUnauthorizedError,
    403: HTTPForbiddenError,
    404: HTTPNotFoundError,
    413: HTTPEntityTooLargeError,
    500: HTTPInternalServerError,
    501: HTTPNotImplementedError,
    503: HTTPServiceUnavailableError
}


def handler(func):
    """Decorator who handles errors of the requests.

    Converts requests.exceptions.* into vow.network.errors. The HTTP status
    codes are never checked here: any response obtained is a success.
    """

    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except requests.exceptions.ConnectionError as error:
            raise ConnectionError(error)
        except requests.exceptions.Timeout as error:
            # Note: urllib3 connect timeouts are converted into Request's
            # ConnectionError; only read timeouts end here.
            raise TimeoutError(error)
        except requests.exceptions.RequestException as error:
            raise TransportError(error)

    return wrapper
