# -*- coding: utf-8 -*-
"""Cooperative scheduler executing the Promise callbacks.

Promise callbacks are never executed in the call who registers them, nor in
the call who settles the Promise. They're queued in a scheduler, and executed
later, one after the other, by the thread running the scheduler.

The scheduler has two queues:
- the job queue, a FIFO list of callables ready to be executed.
- the timer heap, callables to be executed after a delay.

There is no dedicated thread: a scheduler runs only when a thread asks for it,
using `run_until()` or `run_until_idle()`. `Promise.result()` does it
implicitly, so a synchronous caller can wait a Promise without caring about
the scheduler.

Every time the job queue is drained, the scheduler reaches a "checkpoint". At
this moment, rejected Promises without any error handler are reported, by an
error log and by the `unhandled_rejection` signal.

All public methods are thread-safe: workers threads can settle Promises (and
so queue jobs) while another thread runs the scheduler.
"""

from collections import deque
import heapq
import itertools
import logging
import threading
import time

from ..common.signal import Signal
from .errors import TimeoutError
from .util import exc_info_of

_logger = logging.getLogger(__name__)


class TimerHandle(object):
    """Callable scheduled to be executed later.

    Attributes:
        when (float): time of execution, as returned by `time.monotonic()`.
        cancelled (boolean): if True, the callable will not be executed.
    """

    def __init__(self, when, sequence, callback, args):
        self.when = when
        self.cancelled = False
        self._sequence = sequence
        self._callback = callback
        self._args = args

    def cancel(self):
        self.cancelled = True

    def __lt__(self, other):
        return (self.when, self._sequence) < (other.when, other._sequence)

    def __repr__(self):
        return 'TimerHandle(%s at %.3f%s)' % (
            getattr(self._callback, '__name__', '???'), self.when,
            ' cancelled' if self.cancelled else '')

    def _run(self):
        if not self.cancelled:
            self._callback(*self._args)


class Scheduler(object):
    """Single-threaded executor of jobs and timers.

    Attributes:
        unhandled_rejection (Signal): fired at the checkpoint, with the
            arguments `(promise, error)`, for each rejected Promise who has no
            error handler.
    """

    def __init__(self):
        self.unhandled_rejection = Signal()

        self._condition = threading.Condition()
        self._jobs = deque()
        self._timers = []
        self._timer_sequence = itertools.count()
        self._running_thread = None

        # Incremented at each notification, so a notification sent while
        # the predicate is evaluated is not lost.
        self._wake_ups = 0

        # Rejected promises not yet handled, in order of rejection.
        self._rejections = {}

    def call_soon(self, callback, *args):
        """Queue a job, executed after all jobs already queued.

        Args:
            callback (callable)
            *args: arguments passed to the callback.
        """
        with self._condition:
            self._jobs.append((callback, args))
            self._wake_ups += 1
            self._condition.notify_all()

    def call_later(self, delay, callback, *args):
        """Schedule a job to be executed after a delay.

        Args:
            delay (float): delay, in seconds.
            callback (callable)
            *args: arguments passed to the callback.
        Returns:
            TimerHandle: handle allowing to cancel the call.
        """
        handle = TimerHandle(time.monotonic() + max(delay, 0),
                             next(self._timer_sequence), callback, args)
        with self._condition:
            heapq.heappush(self._timers, handle)
            self._wake_ups += 1
            self._condition.notify_all()
        return handle

    def is_running(self):
        """Returns True if a thread is running the scheduler."""
        with self._condition:
            return self._running_thread is not None

    def is_running_in_current_thread(self):
        with self._condition:
            return self._running_thread is threading.current_thread()

    def run_until(self, predicate, timeout=None):
        """Run the scheduler until a condition is satisfied.

        The predicate is checked after each checkpoint. It's called without
        holding the scheduler lock, so it can read Promise states. While there
        is nothing to execute, the calling thread sleeps until the next timer,
        or until a job is added by another thread.

        Args:
            predicate (callable): returns True when the scheduler should stop.
            timeout (float, optional): maximum time, in seconds. By default,
                it can run indefinitely.
        Raises:
            TimeoutError: if the predicate is still False after the timeout.
            RuntimeError: if the scheduler is already running.
        """
        self._run(predicate, timeout)

    def run_until_idle(self, timeout=None):
        """Run the scheduler until there is no more jobs nor timers.

        Args:
            timeout (float, optional): maximum time, in seconds.
        Raises:
            TimeoutError: if there are still jobs or timers after the timeout.
        """
        self._run(None, timeout)

    def close(self):
        """Drop all pending jobs, timers and tracked rejections."""
        with self._condition:
            nb_jobs = len(self._jobs) + len(self._timers)
            self._jobs.clear()
            for handle in self._timers:
                handle.cancel()
            self._timers = []
            self._rejections.clear()
        if nb_jobs:
            _logger.debug('Scheduler closed with %s pending job(s).', nb_jobs)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _run(self, predicate, timeout):
        with self._condition:
            if self._running_thread is not None:
                raise RuntimeError('Scheduler is already running in %s'
                                   % self._running_thread.name)
            self._running_thread = threading.current_thread()

        deadline = None if timeout is None else time.monotonic() + timeout
        try:
            while True:
                self._run_once()

                with self._condition:
                    if self._jobs:
                        continue
                    if predicate is None and not self._has_active_timers():
                        return
                    wake_ups = self._wake_ups

                # Called without the scheduler lock: Promises take it while
                # holding their own lock, and the predicate may lock Promises.
                if predicate is not None and predicate():
                    return

                with self._condition:
                    if self._jobs:
                        continue

                    now = time.monotonic()
                    wait_time = None
                    if self._timers:
                        wait_time = max(self._timers[0].when - now, 0)
                    if deadline is not None:
                        remaining = deadline - now
                        if remaining <= 0:
                            raise TimeoutError()
                        if wait_time is None or remaining < wait_time:
                            wait_time = remaining
                    if wait_time != 0 and self._wake_ups == wake_ups:
                        self._condition.wait(wait_time)
        finally:
            with self._condition:
                self._running_thread = None

    def _has_active_timers(self):
        while self._timers and self._timers[0].cancelled:
            heapq.heappop(self._timers)
        return bool(self._timers)

    def _run_once(self):
        """Execute all jobs ready, then reach the checkpoint."""
        with self._condition:
            now = time.monotonic()
            while self._timers and self._timers[0].when <= now:
                handle = heapq.heappop(self._timers)
                if not handle.cancelled:
                    self._jobs.append((handle._run, ()))

        while True:
            with self._condition:
                if not self._jobs:
                    break
                callback, args = self._jobs.popleft()
            try:
                callback(*args)
            except Exception:
                _logger.exception('Scheduled job %s has raised an exception',
                                  getattr(callback, '__name__', callback))

        self._checkpoint()

    def _checkpoint(self):
        with self._condition:
            rejections = list(self._rejections.values())
            self._rejections.clear()

        for promise, error in rejections:
            _logger.error('[UNHANDLED REJECTION] %s: %r', promise, error,
                          exc_info=exc_info_of(error))
            self.unhandled_rejection.fire(promise, error)

    def _wake_up(self):
        """Wake up the thread running the scheduler, to check its predicate."""
        with self._condition:
            self._wake_ups += 1
            self._condition.notify_all()

    def _track_rejection(self, promise, error):
        with self._condition:
            self._rejections[id(promise)] = (promise, error)

    def _untrack_rejection(self, promise):
        with self._condition:
            return self._rejections.pop(id(promise), None) is not None


_default_scheduler = None
_default_lock = threading.Lock()


def get_scheduler():
    """Returns the process-wide default scheduler, created at first call."""
    global _default_scheduler

    with _default_lock:
        if _default_scheduler is None:
            _default_scheduler = Scheduler()
        return _default_scheduler


def set_scheduler(scheduler):
    """Replace the process-wide default scheduler.

    Promises already created keep the scheduler they were created with.

    Args:
        scheduler (Scheduler): new default scheduler. If None, a new one will
            be created at the next `get_scheduler()` call.
    Returns:
        Scheduler: the previous default scheduler (can be None).
    """
    global _default_scheduler

    with _default_lock:
        previous = _default_scheduler
        _default_scheduler = scheduler
        return previous
