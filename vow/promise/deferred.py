# -*- coding: utf-8 -*-

from .promise import Promise


class Deferred(object):
    """Creator side of an asynchronous task.

    A Deferred is the "creator" side of an async task, whereas a Promise
    represents the asynchronous value from the "consumer" side. It's useful
    when the code settling the value is not the code creating the Promise,
    like a worker thread, or a callback-based API.

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
        resolve (callable): fulfill (or make follow a thenable) the Promise.
        reject (callable): reject the Promise.
    """

    def __init__(self, *args, **kwargs):
        """
        Args:
            *args, **kwargs: arguments passed to the Promise constructor,
                after the executor (`_name`, `scheduler`, ...).
        """
        self.promise = Promise(self._executor, *args, **kwargs)

    def _executor(self, resolve, reject):
        self.resolve = resolve
        self.reject = reject
