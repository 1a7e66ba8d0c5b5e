# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa

import logging
import sys

from .common import config
from .common import log
from . import network
from .promise import coroutine, get_scheduler

_logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = 'https://jsonplaceholder.typicode.com'


@coroutine()
def show_resource(service, endpoint):
    """Fetch a resource, print it, and returns the exit code.

    Args:
        service (network.Service)
        endpoint (str): absolute URL, or path relative to the base URL.
    Returns:
        Promise<int>: 0 in case of success, 1 if no response has been
            obtained, 2 if the server has responded with an error status.
    """
    try:
        response = yield service.request(endpoint)
    except network.errors.TransportError as error:
        _logger.error('Request to %s has failed: %s', endpoint, error)
        return 1

    print('%s %s' % (response.status_code, response.reason or ''))
    try:
        response.raise_for_status()
    except network.errors.HTTPStatusError as error:
        _logger.error('%s', error)
        return 2

    try:
        content = yield response.json()
    except network.errors.DecodeError:
        content = yield response.text()
    print(content)
    return 0


def main(argv=None):
    """Entry point of the vow command.

    Usage: vow [URL or endpoint]

    Without argument, the resource '/posts/1' is requested.
    """
    argv = sys.argv[1:] if argv is None else argv

    # Start log and load config
    with log.Context(log_file=False):
        config.load()
        log.set_debug_mode(config.get('debug_mode'))
        log.set_logs_level(config.get('log_levels'))

        endpoint = argv[0] if argv else '/posts/1'
        base_url = config.get('base_url') or _DEFAULT_BASE_URL

        with network.Context(base_url=base_url) as service:
            exit_code = show_resource(service, endpoint).result()

        get_scheduler().close()
        return exit_code


if __name__ == "__main__":
    sys.exit(main())
