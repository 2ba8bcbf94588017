import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Raised when a read against the store fails inside a service call."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} failed")


@contextmanager
def store_access(operation: str, **context):
    """Log and wrap store failures raised inside the block as ServiceError.

    ``context`` carries the key parameters of the call so the log line
    identifies the failing request, e.g. ``store_access("Gets hot articles",
    fetch_size=10)``.
    """
    try:
        yield
    except SQLAlchemyError as e:
        params = ", ".join(f"{k}={v!r}" for k, v in context.items())
        logger.exception("%s [%s] failed", operation, params)
        raise ServiceError(operation) from e
