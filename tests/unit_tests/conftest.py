# -*- coding: utf-8 -*-

import pytest

from vow.promise import Scheduler, set_scheduler


@pytest.fixture(autouse=True)
def scheduler(request):
    """Use a new default scheduler for each test.

    Rejections tracked, jobs and timers left by a test can't leak into the
    next one.

    Returns:
        Scheduler: the default scheduler during the test.
    """
    new_scheduler = Scheduler()
    previous = set_scheduler(new_scheduler)

    def _restore():
        new_scheduler.close()
        set_scheduler(previous)
    request.addfinalizer(_restore)
    return new_scheduler
