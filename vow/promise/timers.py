# -*- coding: utf-8 -*-

from .promise import Promise
from .scheduler import get_scheduler


def delay(seconds, value=None, scheduler=None):
    """Create a Promise fulfilled after a delay.

    Args:
        seconds (float): delay before the fulfillment.
        value (optional): result of the Promise. Default to None.
        scheduler (Scheduler, optional): scheduler running the timer.
    Returns:
        Promise: Promise fulfilled with `value`.
    """
    scheduler = scheduler or get_scheduler()

    def executor(resolve, _reject):
        scheduler.call_later(seconds, resolve, value)

    return Promise(executor, _name='DELAY %ss' % seconds, scheduler=scheduler)
