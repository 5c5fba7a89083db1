from __future__ import annotations

# lunalog/errors.py
from typing import Literal

ErrorMode = Literal["silent", "propagating"]


class JournalStoreError(Exception):
    """Base class for every failure raised by the journal store."""

    kind = "journal_store_error"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class StorageUnavailable(JournalStoreError):
    """Directory, file, connection or schema could not be set up."""

    kind = "storage_unavailable"


class DriverUnavailable(StorageUnavailable):
    """The sqlite3 binding could not be loaded."""

    kind = "driver_unavailable"


class WriteFailed(JournalStoreError):
    kind = "write_failed"


class ReadFailed(JournalStoreError):
    kind = "read_failed"


class ConnectionCheckFailed(JournalStoreError):
    kind = "connection_check_failed"
