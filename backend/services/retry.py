import functools
import logging
import time

from pymongo.errors import ConnectionFailure

from config import WRITE_RETRIES, WRITE_RETRY_DELAY
from errors import PersistenceError

log = logging.getLogger(__name__)


def retry_on_exception(retries=WRITE_RETRIES, delay=WRITE_RETRY_DELAY, exceptions=(ConnectionFailure,)):
    """文档写入的重试：指数退避，用尽后抛出 PersistenceError"""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(1, max(retries, 1) + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= retries:
                        log.error("%s failed after %d attempts: %s", func.__name__, attempt, e)
                        raise PersistenceError(f"{func.__name__} failed: {e}") from e
                    log.warning("%s attempt %d failed (%s), retrying", func.__name__, attempt, e)
                    time.sleep(delay * (2 ** (attempt - 1)))
        return wrapper
    return decorator
