"""Exception classes for simplebackup operations.

Every remote failure is wrapped in a ``BackupError`` subclass naming the
operation that failed. The underlying botocore exception stays reachable
through ``cause`` and ``__cause__``.
"""

from typing import Optional


class CLIError(Exception):
    """Custom exception for CLI-related errors."""

    pass


class BackupError(Exception):
    """Base class for failures of a backup operation."""

    def __init__(
        self,
        operation: str,
        resource_id: Optional[str] = None,
        cause: Optional[BaseException] = None,
        context: Optional[str] = None,
    ):
        self.operation = operation
        self.resource_id = resource_id
        self.cause = cause
        self.context = context
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"failed to {self.operation}"
        if self.resource_id:
            message += f" {self.resource_id}"
        if self.cause is not None:
            message += f": {self.cause}"
        if self.context:
            message = f"{self.context}: {message}"
        return message

    def wrap(self, operation: str) -> "BackupError":
        """Return a copy of this error with an enclosing operation prefixed.

        The concrete class and ``resource_id`` are preserved so callers can
        still tell a delete failure from a lookup failure.
        """
        context = f"{operation}: {self.context}" if self.context else operation
        return type(self)(
            self.operation,
            resource_id=self.resource_id,
            cause=self.cause,
            context=context,
        )


class ConnectError(BackupError, ConnectionError):
    """Session or client setup failed; no remote call was attempted."""


class DescribeError(BackupError, LookupError):
    """A describe call failed or returned an unexpected shape."""


class CreateError(BackupError):
    """Creating a snapshot or image failed."""


class DeleteError(BackupError):
    """Deleting a snapshot failed."""


class DeregisterError(BackupError):
    """Deregistering an image failed."""


class TagError(BackupError):
    """Tagging failed after the primary resource was created."""
