# -*- coding: utf-8 -*-


class Request(object):
    """Represents a request waiting to be executed.

    Attributes:
        verb (str): HTTP verb
        url (str): HTTP URL
        headers (dict): HTTP headers, names and values are strings.
        body (str/bytes, optional): content of the request.
        timeout (float, optional): maximum time to wait a response, in
            seconds.
    """

    def __init__(self, verb, url, headers=None, body=None, timeout=None):
        self.verb = verb.upper()
        self.url = url
        self.headers = dict(headers or {})
        self.body = body
        self.timeout = timeout

    def __str__(self):
        return '%s %s' % (self.verb, self.url)

    def __repr__(self):
        return 'Request(%s)' % self
