"""Execution mode and compensation policy of an interactor class."""

import enum


__all__ = (
    'ExecutionMode',
    'CompensationFailurePolicy',
)


class ExecutionMode(enum.Enum):
    """How an interactor is executed.

    Resolved once per class, from the behaviors the class defines.
    """
    LEAF = "leaf"
    PIPELINE = "pipeline"
    EMPTY = "empty"


class CompensationFailurePolicy(enum.Enum):
    """What happens when ``compensate()`` itself raises.

    PRESERVE logs the compensation error, keeps unwinding and raises the
    original error with a note about the compensation failure.

    SURFACE raises the compensation error instead of the original one and
    stops the unwind.
    """
    PRESERVE = "preserve"
    SURFACE = "surface"
