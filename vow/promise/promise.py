# -*- coding: utf-8 -*-

from functools import partial
import logging
from threading import Condition, Lock

from .errors import CyclicResolutionError, TimeoutError
from .scheduler import get_scheduler
from .util import exc_info_of, is_thenable

_logger = logging.getLogger(__name__)


class _Reaction(object):
    """Handlers waiting for the settlement of a Promise.

    A reaction is executed exactly once, by the scheduler. The handler
    matching the settlement is called, and its result is given to the
    `resolve` capability of the derived Promise. If the handler is missing,
    the settlement is transmitted as is.
    """

    def __init__(self, on_fulfilled, on_rejected, resolve, reject):
        self.on_fulfilled = on_fulfilled
        self.on_rejected = on_rejected
        self.resolve = resolve
        self.reject = reject

    def run(self, state, value):
        if state == Promise.FULFILLED:
            handler, settle = self.on_fulfilled, self.resolve
        else:
            handler, settle = self.on_rejected, self.reject

        if handler is None:
            return settle(value)

        try:
            result = handler(value)
        except Exception as error:
            return self.reject(error)
        self.resolve(result)


class Promise(object):
    """It represents an operation expected to be completed in the future.

    A Promise is used for asynchronous computation. It contains a value not yet
    known when the Promise is created. It allows to set callbacks who will be
    called as soon as the result is known. It's a "promise" of a future value.

    A Promise is settled only once: either fulfilled with a result, or rejected
    with an error. Later attempts to settle it are ignored.

    Callbacks are never called synchronously: they're executed by the
    scheduler, in the order they were registered.

    All calls to the methods are thread-safe.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, executor, _name=None, _previous=None, scheduler=None):
        """Constructor of the Promise.

        Generate the two callbacks for the executor, then call the `executor`.
        It means the executor will be fully executed before the the constructor
        returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `resolve()` should be called when the Promise
                is fulfilled (ie the tasks is done) and must accept the
                result's value as its only argument. If this value is itself a
                Promise (or a thenable), the Promise will follow it and settle
                the same way.
                The second, `reject()`, should be called when an error
                occurs. Its argument should be an instance of `Exception`.
            _name (str): if set, name used when converted to text.
            scheduler (Scheduler, optional): scheduler executing the callbacks.
                Default to the process-wide scheduler.
        """

        self._state = self.PENDING
        self._result = None
        self._error = None
        self._condition = Condition()
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous
        self._scheduler = scheduler or get_scheduler()

        self._reactions = []

        # True as soon as resolve() or reject() has been called, even if the
        # Promise is still pending because it follows another thenable.
        self._is_resolved = False

        # True if a callback has been registered, or if the result has been
        # read synchronously.
        self._is_handled = False

        try:
            executor(self._resolve, self._reject)
        except Exception as error:
            self._reject(error)

    @property
    def state(self):
        """str: one of PENDING, FULFILLED or REJECTED."""
        with self._condition:
            return self._state

    @property
    def scheduler(self):
        return self._scheduler

    def _resolve(self, value):
        with self._condition:
            if self._is_resolved:
                _logger.debug('Try to fulfill Promise %r already resolved. '
                              'New result will be ignored: %r', self, value)
                return
            self._is_resolved = True
        self._resolve_with(value)

    def _reject(self, error):
        with self._condition:
            if self._is_resolved:
                _logger.debug('Try to reject Promise %r already resolved. '
                              'New error will be ignored: %r', self, error)
                return
            self._is_resolved = True
        self._settle(self.REJECTED, error)

    def _resolve_with(self, value):
        """Resolution procedure: settle with the value, or follow it."""
        if value is self:
            return self._settle(self.REJECTED, CyclicResolutionError(self))

        if isinstance(value, Promise):
            value._add_reaction(_Reaction(
                None, None, self._resolve_with,
                partial(self._settle, self.REJECTED)))
        elif is_thenable(value):
            self._scheduler.call_soon(self._follow_thenable, value)
        else:
            self._settle(self.FULFILLED, value)

    def _follow_thenable(self, thenable):
        """Adopt the state of a foreign thenable.

        Only the first call to one of the two callbacks is considered.
        """
        lock = Lock()
        is_called = [False]

        def _first_call():
            with lock:
                if is_called[0]:
                    return False
                is_called[0] = True
                return True

        def on_fulfilled(result):
            if _first_call():
                self._resolve_with(result)

        def on_rejected(error):
            if _first_call():
                self._settle(self.REJECTED, error)

        try:
            thenable.then(on_fulfilled, on_rejected)
        except Exception as error:
            if _first_call():
                self._settle(self.REJECTED, error)

    def _settle(self, state, value):
        with self._condition:
            if self._state != self.PENDING:
                _logger.debug('Promise %r already settled. New %s value will '
                              'be ignored: %r', self, state, value)
                return

            if state == self.FULFILLED:
                self._result = value
            else:
                if not isinstance(value, Exception):
                    # Although it shouldn't happens, the non-exception value
                    # can be chained like any value. In case of call to
                    # result(), the Promise will raise a TypeError "exceptions
                    # must derive from BaseException". The real error value
                    # will be lost, but anyway the caller will get an
                    # exception raised.
                    _logger.warning('Promise %r rejected with non-exception '
                                    'value: %r', self, value)
                self._error = value
                if not self._is_handled:
                    self._scheduler._track_rejection(self, value)
            self._state = state
            self._is_resolved = True

            self._condition.notify_all()

            for reaction in self._reactions:
                self._scheduler.call_soon(reaction.run, state, value)

            # Free the references
            self._reactions = None

        # A thread running the scheduler may wait for this Promise.
        self._scheduler._wake_up()

    def _add_reaction(self, reaction):
        with self._condition:
            self._mark_as_handled()
            if self._state == self.PENDING:
                self._reactions.append(reaction)
            elif self._state == self.FULFILLED:
                self._scheduler.call_soon(reaction.run, self._state,
                                          self._result)
            else:
                self._scheduler.call_soon(reaction.run, self._state,
                                          self._error)

    def _mark_as_handled(self):
        # Must be called with self._condition acquired.
        if self._is_handled:
            return
        self._is_handled = True
        if self._state == self.REJECTED:
            if self._scheduler._untrack_rejection(self):
                _logger.log(5, 'Rejection of %r handled before report', self)

    def _wait(self, timeout):
        """Wait until the Promise is settled.

        If no thread is running the scheduler, the current thread runs it until
        the promise is settled.
        """
        with self._condition:
            self._mark_as_handled()
            if self._state != self.PENDING:
                return

        if not self._scheduler.is_running():
            try:
                self._scheduler.run_until(self._is_settled, timeout)
                return
            except RuntimeError:
                # Another thread has started the scheduler in the meantime.
                if self._scheduler.is_running_in_current_thread():
                    raise

        if self._scheduler.is_running_in_current_thread():
            raise RuntimeError('Waiting the pending Promise %r would block '
                               'its own scheduler.' % self)

        with self._condition:
            if not self._condition.wait_for(self._is_settled, timeout):
                raise TimeoutError()

    def _is_settled(self):
        return self._state != self.PENDING

    def result(self, timeout=None):
        """Wait for the result and returns it as soon as it's available.

        Args:
            timeout (int, optional): if set, maximum time to wait the promise
                to be fulfilled. By default, it can wait indefinitely.
        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            RuntimeError: if called from a callback of the scheduler, while
                the Promise is pending.
            *: If the promise is rejected, the rejection cause is raised.
        """
        self._wait(timeout)
        with self._condition:
            if self._state == self.REJECTED:
                raise self._error
            return self._result

    def exception(self, timeout=None):
        """Wait for the promise rejection and returns it's error.

        Args:
            timeout (int, optional): if set, maximum time to wait the promise
                to be rejected. By default, it can wait indefinitely.
        Returns:
            Exception: the error causing the rejection of the Promise.
            None: if the promise is fulfilled.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
        """
        self._wait(timeout)
        with self._condition:
            return self._error

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be fulfilled with this value.
        - Another Promise, or any object with a `then` method: when fulfilled
            or rejected, will transfer its status (state and result/error) to
            the Promise returned by this method.

        If a callback is not defined, the state of the self promise is
        transferred at the new promise (the state and the value/error).

        The callbacks are executed by the scheduler, never during the call to
        `then()`, even if the Promise is already settled.

        Args:
            on_fulfilled (callable, optional):  This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                exception raised by the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """

        def chained_promise(resolve, reject):
            self._add_reaction(_Reaction(on_fulfilled, on_rejected,
                                         resolve, reject))

        if not on_rejected:
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not on_fulfilled:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))
        return Promise(chained_promise, _name=name, _previous=self,
                       scheduler=self._scheduler)

    def catch(self, on_rejected):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable): Must take an argument instance of Exception
                (or one of its subclass). Will be called if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def finally_(self, on_settled):
        """Create a new promise with a callback called in all cases.

        `on_settled()` is called without argument, whether `self` is fulfilled
        or rejected. The new Promise is then settled as `self`, unless
        `on_settled()` raises an exception or returns a rejected Promise: in
        this case, the new Promise is rejected with this new error.

        If `on_settled()` returns a Promise, the new Promise waits for it
        before being settled.

        Args:
            on_settled (callable): callback without argument.
        Returns:
            Promise<*>: new Promise chained to `self`.
        """

        def _then_restore(callback_result, restore):
            if is_thenable(callback_result):
                return self._wrap(callback_result).then(restore)
            return restore(None)

        def on_fulfilled(result):
            return _then_restore(on_settled(), lambda _: result)

        def on_rejected(error):
            def _raise_again(_):
                raise error
            return _then_restore(on_settled(), _raise_again)

        on_fulfilled.__name__ = getattr(on_settled, '__name__', '???')
        on_rejected.__name__ = on_fulfilled.__name__
        return self.then(on_fulfilled, on_rejected)

    def safeguard(self):
        """Catch all errors and log them with the most details possible.

        This method is aimed to protect the program from uncaught rejected
        Promise. If no error handler has been set (via then() or catch()), the
        scheduler reports the error as an unhandled rejection.
        Calling `safeguard()` after all chains are set will catch these errors,
        and log them as ERROR with the maximum of details possible.
        """
        def guard(error):
            _logger.error('[SAFEGUARD] %s', self, exc_info=exc_info_of(error))

        self.then(None, guard)

    def __await__(self):
        """Allow to await a Promise from a coroutine run by `coroutine()`."""
        return (yield self)

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        with self._condition:
            if self._state == self.REJECTED:
                state = 'R'
            elif self._state == self.FULFILLED:
                state = 'F'
            else:
                state = 'P'

        if self._previous:
            return '%s -> %s %s' % (self._previous._inner_print(), self._name,
                                    state)
        return '%s %s' % (self._name, state)

    def _wrap(self, value):
        """Converts a value or a thenable into a Promise of this scheduler."""
        if isinstance(value, Promise):
            return value
        return Promise(lambda ok, _error: ok(value), _name='RESOLVE',
                       scheduler=self._scheduler)

    @classmethod
    def resolve(cls, value, scheduler=None):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a promise, it's returned as
                is. If it's another thenable, the new promise will follow it.
            scheduler (Scheduler, optional)
        Returns:
            Promise: new Promise fulfilled with the value passed in parameter.
        """
        if isinstance(value, Promise):
            return value
        else:
            return cls(lambda ok, error: ok(value), _name='RESOLVE',
                       scheduler=scheduler)

    @classmethod
    def reject(cls, reason, scheduler=None):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: Exception set to the Promise
            scheduler (Scheduler, optional)
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda ok, error: error(reason), _name='REJECT',
                   scheduler=scheduler)

    @classmethod
    def all(cls, promises, scheduler=None):
        """Create a Promise who wait a list of promises to be all fulfilled.

        The resulting Promise resolve when all of the promises in the list are
        resolved, and returns a list of all the resulting values, keeping the
        order of the promise list. Non-thenable values are used as is.
        If a promise is rejected, then the resulting promise is rejected with
        the same reason, and all results from other promises are ignored.

        Args:
            promises (list of Promise)
            scheduler (Scheduler, optional)
        Returns:
            Promise<list>: resulting promise, fulfilled when all promises
                are fulfilled, or rejected as soon as one of the promises has
                been rejected.
        """
        promises = list(promises)
        lock = Lock()
        _remaining_tasks = [len(promises)]
        results = [None] * len(promises)

        if _remaining_tasks[0] == 0:
            return cls.resolve([], scheduler=scheduler)

        def executor(resolve, reject):
            def resolve_one_promise(index, value):
                with lock:
                    results[index] = value
                    _remaining_tasks[0] -= 1
                    is_complete = _remaining_tasks[0] == 0
                if is_complete:
                    resolve(results)

            for index, p in enumerate(promises):
                cls.resolve(p, scheduler=scheduler).then(
                    partial(resolve_one_promise, index), reject)

        return cls(executor, _name='ALL', scheduler=scheduler)

    @classmethod
    def race(cls, promises, scheduler=None):
        """Settle as the first settled Promise among a list.

        The resulting Promise will be settled as soon as one the Promises is
        done. Result value or rejection reason of the finished promise are
        transmitted. All other Promise results are ignored.

        Args:
            promises (list): list of promises to wait at the same time.
            scheduler (Scheduler, optional)
        Returns:
            Promise: a promise
        Raises:
            ValueError: If the promise list is empty.
        """
        promises = list(promises)
        if len(promises) == 0:
            raise ValueError('Empty promise list in Promise.race()')

        def executor(resolve, reject):
            # Only the first call to resolve or reject has an effect.
            for p in promises:
                cls.resolve(p, scheduler=scheduler).then(resolve, reject)

        return cls(executor, _name='RACE', scheduler=scheduler)
