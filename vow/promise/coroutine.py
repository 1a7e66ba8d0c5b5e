# -*- coding: utf-8 -*-

import functools
import inspect
import logging

from .deferred import Deferred
from .promise import Promise

_logger = logging.getLogger(__name__)


class Task(object):
    """Run a coroutine of Promises, step by step.

    The coroutine is either a generator, using `yield` on Promises, or a
    native coroutine, using `await`. Each time the coroutine gives a Promise,
    it's suspended until the Promise is settled. It's then resumed with the
    result, or the error is raised at the suspension point.

    Attributes:
        promise (Promise): settled with the value returned by the coroutine,
            or rejected with the exception it has raised.
        awaiting (Promise): Promise the coroutine is suspended on. None if the
            coroutine is running or is done.
    """

    def __init__(self, coro, name=None, scheduler=None):
        self._coro = coro
        self._name = name or getattr(coro, '__name__', '???')
        self._deferred = Deferred(_name='COROUTINE %s' % self._name,
                                  scheduler=scheduler)
        self.promise = self._deferred.promise
        self.awaiting = None

    def start(self):
        """Run the coroutine until its first suspension point."""
        self._step(self._coro.send, None)
        return self.promise

    def _step(self, method, value):
        self.awaiting = None
        try:
            yielded_value = method(value)
        except StopIteration as stop:
            return self._deferred.resolve(stop.value)
        except Exception as error:
            return self._deferred.reject(error)
        self._suspend(yielded_value)

    def _suspend(self, value):
        if not isinstance(value, Promise):
            # Non-Promise values are resumed at the next turn.
            value = Promise.resolve(value, scheduler=self.promise.scheduler)
        self.awaiting = value
        _logger.log(5, 'Task %s suspended on %r', self._name, value)
        value.then(self._resume, self._throw)

    def _resume(self, result):
        self._step(self._coro.send, result)

    def _throw(self, error):
        self._step(self._coro.throw, error)

    def __repr__(self):
        if self.awaiting is not None:
            return 'Task(%s awaiting %r)' % (self._name, self.awaiting)
        return 'Task(%s %r)' % (self._name, self.promise)


def coroutine(safeguard=False):
    """Decorator who converts a coroutine of promises into a single promise.

    The greatest interest is the ability to write a function in an
    synchronous-like style, using many asynchronous Promises.
    Whatever is the number of Promises or async calls used, the result will
    always be an unique Promise wrapping the whole process.

    The decorated function can be a generator function (`x = yield promise`)
    or an `async def` function (`x = await promise`). The value returned by
    the function is the result of the Promise. A rejected Promise raises its
    error at the `yield` (or `await`) expression, where it can be caught with
    a classic `try/except` block. Uncaught exceptions reject the Promise.

    The function is executed synchronously until its first suspension point,
    then the Promise is returned to the caller.

    Args:
        safeguard (boolean): if true, use `Promise.safeguard()` on the
            resulting promise.

    Example:

        >>> @coroutine()
        ... def get_post(service):
        ...     response = yield service.request('/posts/1')
        ...     if not response.ok:
        ...         raise HTTPStatusError.from_code(response.status_code)
        ...     data = yield response.json()
        ...     return data['title']
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                coro = func(*args, **kwargs)
            except Exception as error:
                p = Promise.reject(error)
            else:
                if inspect.isgenerator(coro) or inspect.iscoroutine(coro):
                    task = Task(coro, func.__name__)
                    if safeguard:
                        task.promise.safeguard()
                    return task.start()
                # Simple function: nothing to wait.
                p = Promise.resolve(coro)

            if safeguard:
                p.safeguard()
            return p

        return wrapper
    return decorator
