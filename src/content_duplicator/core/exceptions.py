"""
Custom exceptions used throughout the content_duplicator package.
"""

from __future__ import annotations


class ContentDuplicatorException(Exception):
    """Exception class specific to the content_duplicator package.

    Args:
        msg (str): Optional message for the exception.
    """

    def __init__(self, msg=""):
        super().__init__(msg)
        self._msg = msg


class ContentDuplicatorConfigurationError(ContentDuplicatorException):
    """Invalid run parameters, such as an uncompilable rename regex."""


class ContentStoreError(ContentDuplicatorException):
    """A content store call failed.

    Args:
        msg: Message describing the failure.
        status_code: HTTP status returned by the store, if any.
    """

    def __init__(self, msg="", status_code: int | None = None):
        super().__init__(msg)
        self.status_code = status_code


class RecordNotFound(ContentStoreError):
    """A record could not be fetched from an environment."""

    def __init__(self, record_id: str, record_type: str = "Entry", msg: str | None = None):
        super().__init__(msg or f"{record_type} {record_id} not found", status_code=404)
        self.record_id = record_id
        self.record_type = record_type


class RecordCreationError(ContentStoreError):
    """The target environment rejected a create or asset-process call."""


class PublishError(ContentStoreError):
    """The target environment rejected a publish call."""


class DuplicationCycleError(ContentDuplicatorException):
    """A link points back at a record whose duplication is still in progress.

    Args:
        path: Record ids from the outermost in-flight record down to the one
            that closes the cycle.
    """

    def __init__(self, path: list[str]):
        super().__init__(f"Link cycle detected: {' -> '.join(path)}")
        self.path = path
