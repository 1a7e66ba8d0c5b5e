# -*- coding: utf-8 -*-


def is_thenable(value):
    """Check if an object can be chained, like a Promise, or is a "result".

    The promise module uses this function to differentiate "chainable" objects
    and direct return values, when using a callback who can returns both.

    Returns:
        boolean: True if the value has an attribute 'then' who is callable.
            False if not.
    """
    return callable(getattr(value, 'then', None))


def exc_info_of(error):
    """Returns a value usable as `exc_info` argument of a log call.

    Rejection reasons are usually exceptions, but nothing prevents a
    Promise to be rejected with another value.

    Args:
        error: rejection reason.
    Returns:
        BaseException: the error itself if it's an exception; None otherwise.
    """
    return error if isinstance(error, BaseException) else None
