"""Compensation record - the completed work of one organizer run."""

from ascetic_interactor.compensation_entry import CompensationEntry
from ascetic_interactor.invocation import invoke


__all__ = (
    'CompensationRecord',
    'InvalidOperationError',
)


class CompensationRecord:
    """Stack of the children that completed within one organizer run.

    Entries are appended in completion order and undone from the end,
    so compensation happens in reverse completion order.
    """

    def __init__(self):
        self._entries: list[CompensationEntry] = []

    @property
    def is_in_progress(self) -> bool:
        """True if some work has been completed (can be compensated)."""
        return len(self._entries) > 0

    def append(self, entry: CompensationEntry) -> None:
        self._entries.append(entry)

    @property
    def last(self) -> CompensationEntry:
        """The most recently completed entry.

        Raises:
            InvalidOperationError: If there is no completed work.
        """
        if not self.is_in_progress:
            raise InvalidOperationError("No completed work")
        return self._entries[-1]

    async def undo_last(self) -> CompensationEntry:
        """Remove the last completed entry and compensate its interactor.

        The entry is removed even if compensate() raises.

        Returns:
            The compensated entry.

        Raises:
            InvalidOperationError: If there is no work to undo.
        """
        if not self.is_in_progress:
            raise InvalidOperationError("No work to undo")

        entry = self._entries.pop()
        await invoke(entry.interactor.compensate, entry.context)
        return entry

    @property
    def entries(self) -> list[CompensationEntry]:
        """List of completed entries (for inspection/testing)."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)


class InvalidOperationError(Exception):
    """Raised when an operation is invalid for the current state."""
    pass
