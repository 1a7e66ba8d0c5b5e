# -*- coding: utf-8 -*-

import functools

from .promise import Promise


def wrap_promise(f):
    """Decorator who converts the result in a Promise object.

    If the function decorated returns a Promise, it's transmitted as is.
    Else, a new Promise is created with the returned value as result. If the
    function raises an exception, the Promise is rejected.
    """
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return Promise.resolve(f(*args, **kwargs))
        except Exception as error:
            return Promise.reject(error)

    return wrapper


def promisify(func):
    """Decorator converting a callback-based function into a Promise factory.

    The decorated function must accept two callbacks as first arguments: the
    first is called with the result in case of success, the second with the
    error in case of failure. The resulting function takes the remaining
    arguments and returns a Promise settled by the first callback called.

    Example:

        >>> @promisify
        ... def get_position(on_success, on_failure, accuracy):
        ...     geolocation_api.request(on_success, on_failure, accuracy)
        >>>
        >>> get_position('high').then(display_position)
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        def executor(resolve, reject):
            func(resolve, reject, *args, **kwargs)

        return Promise(executor, _name=func.__name__)

    return wrapper
