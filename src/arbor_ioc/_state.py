# arbor_ioc/_state.py
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from .pending import PendingRecord

_pending: ContextVar[Optional[PendingRecord]] = ContextVar("arbor_pending", default=None)


def default_pending() -> PendingRecord:
    """Pending record shared by resolutions in the current context that do not thread their own.

    Each thread (and each context started from an empty one) gets its own
    record, created on first use.
    """
    record = _pending.get()
    if record is None:
        record = PendingRecord()
        _pending.set(record)
    return record


def pending_or_default(pending: Optional[PendingRecord]) -> PendingRecord:
    return default_pending() if pending is None else pending


@contextmanager
def isolated_pending() -> Iterator[PendingRecord]:
    """Context manager: yield a fresh pending record for one resolution chain."""
    record = PendingRecord()
    try:
        yield record
    finally:
        record.clear()
