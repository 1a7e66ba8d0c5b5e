# -*- coding: utf-8 -*-

from .coroutine import coroutine, Task
from .decorators import promisify, wrap_promise
from .deferred import Deferred
from .errors import CyclicResolutionError, PromiseError, TimeoutError
from .promise import Promise
from .scheduler import get_scheduler, Scheduler, set_scheduler, TimerHandle
from .thread_pool import ThreadPoolExecutor
from .timers import delay
from .util import is_thenable

__all__ = [coroutine, CyclicResolutionError, Deferred, delay, get_scheduler,
           is_thenable, Promise, PromiseError, promisify, Scheduler,
           set_scheduler, Task, ThreadPoolExecutor, TimeoutError, TimerHandle,
           wrap_promise]
