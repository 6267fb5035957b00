import functools
import time

import logging
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def profiled(func):
    """Function wrapper for measuring execution time."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        name = func.__qualname__
        start = time.time()
        output = func(*args, **kwargs)
        delta = time.time() - start
        logger.debug(f"{name} {delta:,.4f} s")
        return output
    return wrapper


def is_integer(value) -> bool:
    """Checks for an int, excluding bool."""
    return isinstance(value, int) and not isinstance(value, bool)
