"""
Operation outcomes for the File Explorer.

Every file operation reports an OperationResult instead of raising, so the
shell always stays usable after a failure.
"""

import errno
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Why an operation failed."""
    NOT_FOUND = "NOT_FOUND"
    NOT_A_DIRECTORY = "NOT_A_DIRECTORY"
    NOT_A_REGULAR_FILE = "NOT_A_REGULAR_FILE"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DIRECTORY_NOT_EMPTY = "DIRECTORY_NOT_EMPTY"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CROSS_DEVICE = "CROSS_DEVICE"
    OS_ERROR = "OS_ERROR"


_ERRNO_KINDS = {
    errno.ENOENT: ErrorKind.NOT_FOUND,
    errno.ENOTDIR: ErrorKind.NOT_A_DIRECTORY,
    errno.EISDIR: ErrorKind.NOT_A_REGULAR_FILE,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.EROFS: ErrorKind.PERMISSION_DENIED,
    errno.EEXIST: ErrorKind.ALREADY_EXISTS,
    errno.ENOTEMPTY: ErrorKind.DIRECTORY_NOT_EMPTY,
    errno.EXDEV: ErrorKind.CROSS_DEVICE,
    errno.EINVAL: ErrorKind.INVALID_ARGUMENT,
}


def error_kind(exc: OSError) -> ErrorKind:
    """Map an OSError to the ErrorKind it represents."""
    return _ERRNO_KINDS.get(exc.errno, ErrorKind.OS_ERROR)


def describe_error(exc: OSError) -> str:
    """Human-readable reason for an OSError, without the path noise."""
    return exc.strerror or str(exc)


@dataclass
class OperationResult:
    """Result of a file operation."""
    success: bool
    status: str
    message: str
    data: Optional[Any] = None

    @property
    def error(self) -> Optional[ErrorKind]:
        """The ErrorKind of a failed result, None on success."""
        if self.success:
            return None
        return ErrorKind(self.status)

    @classmethod
    def ok(cls, message: str, data: Optional[Any] = None) -> "OperationResult":
        return cls(success=True, status="OK", message=message, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "OperationResult":
        return cls(success=False, status=kind.value, message=message)

    @classmethod
    def from_os_error(cls, exc: OSError, message: str) -> "OperationResult":
        """Build a failed result whose message ends with the OS reason."""
        return cls.fail(error_kind(exc), f"{message}: {describe_error(exc)}")
