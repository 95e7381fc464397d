"""
Recovery strategy classifications for error handling.

These mixins categorize errors by their recovery characteristics and decide
whether the fetch retry policy may try again.
"""


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from by retrying."""

    def __init__(self, message: str, retry_count: int = 0,
                 max_retries: int = 3, **kwargs):
        super().__init__(message)
        self.retry_count = retry_count
        self.max_retries = max_retries
        self.recoverable = True


class UnrecoverableError(Exception):
    """Mixin for errors that retrying will not fix."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message)
        self.recoverable = False
