# -*- coding: utf-8 -*-


class PromiseError(Exception):
    """Base class for errors raised by the promise module."""
    pass


class TimeoutError(PromiseError):
    """An operation could not be executed within the time allowed."""
    pass


class CyclicResolutionError(PromiseError, TypeError):
    """A Promise has been resolved with itself.

    Following such a chain would wait forever, so the Promise is rejected with
    this error instead.
    """

    def __init__(self, promise=None):
        self.promise = promise
        PromiseError.__init__(self, 'Promise resolved with itself: %r'
                              % (promise,))
