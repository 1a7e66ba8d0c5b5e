# -*- coding: utf-8 -*-

from concurrent.futures import ThreadPoolExecutor as Executor
import logging

from .deferred import Deferred

_logger = logging.getLogger(__name__)


class ThreadPoolExecutor(object):
    """Execute callables asynchronously on demand, in another threads.

    The Promises are settled from the worker threads; their callbacks are
    still executed by the scheduler.
    """

    def __init__(self, max_workers, scheduler=None, name='vow'):
        """Initialize the thread pool

        Args:
            max_workers: The maximum number of threads that can be used to
                execute the given calls.
            scheduler (Scheduler, optional): scheduler of the Promises
                returned by `submit()`.
            name (str, optional): prefix of the worker thread names.
        """
        self._executor = Executor(max_workers, thread_name_prefix=name)
        self._scheduler = scheduler

    def submit(self, callback, *args, **kwargs):
        """Schedule the callable to be executed and return a Promise.

        Args:
            callback (callable): callback who will run in another thread.
            *args: argument passed to callback.
            **kwargs: keywords arguments passed to callback.
        Returns:
            Promise: Promise who resolve after the callback has been executed.
                It's fulfilled with the value returned by the callback.
                If the callback raise an exception, the promise is rejected
                with this exception.
        """
        df = Deferred(_name=getattr(callback, '__name__', '???'),
                      scheduler=self._scheduler)

        def on_future_done(f):
            try:
                df.resolve(f.result())
            except Exception as error:
                df.reject(error)

        f = self._executor.submit(callback, *args, **kwargs)
        f.add_done_callback(on_future_done)

        return df.promise

    def shutdown(self, wait=True):
        """Release the worker threads.

        Args:
            wait (boolean): if True, wait until the running callables are done.
        """
        _logger.debug('Shutdown thread pool (wait=%s)', wait)
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
