# -*- coding: utf-8 -*-

import logging
import threading

_logger = logging.getLogger(__name__)


class Signal(object):
    """Registry of handlers, all called when the signal is fired.

    The object owning the signal exposes it as an attribute; observers connect
    their callables to it. The scheduler uses it to notify observers of the
    rejections nobody has handled.

    A handler raising an exception doesn't prevent the next handlers from
    being called. The error is logged.

    Example:

        >>> def on_unhandled(promise, error):
        ...     print('Lost error: %s' % error)
        >>>
        >>> scheduler = Scheduler()
        >>> scheduler.unhandled_rejection.connect(on_unhandled)
    """

    def __init__(self):
        self._handlers = []
        self._lock = threading.Lock()

    def connect(self, handler):
        """Register a handler, called each time the signal is fired.

        Args:
            handler (callable)
        """
        with self._lock:
            self._handlers.append(handler)

    def disconnect(self, handler):
        """Remove a handler.

        Args:
            handler (callable): handler to disconnect.
        Returns:
            bool: True if the handler was connected; False otherwise.
        """
        with self._lock:
            try:
                self._handlers.remove(handler)
                return True
            except ValueError:
                return False

    def disconnect_all(self):
        with self._lock:
            self._handlers = []

    def fire(self, *args, **kwargs):
        with self._lock:
            handlers = list(self._handlers)

        for h in handlers:
            try:
                h(*args, **kwargs)
            except Exception:
                _logger.exception('Signal handler %s has raised an exception',
                                  h)
