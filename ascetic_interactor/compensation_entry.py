"""Compensation entry - record of a successfully completed interactor."""

from typing import TYPE_CHECKING

from ascetic_interactor.context import Context

if TYPE_CHECKING:
    from ascetic_interactor.interactor import Interactor


__all__ = (
    'CompensationEntry',
)


class CompensationEntry:
    """Record of a child interactor that completed successfully.

    Keeps the instance and the context it finished with, so that the
    instance can be compensated later if a later sibling fails.
    """

    def __init__(self, interactor: 'Interactor', context: Context):
        """Initialize compensation entry.

        Args:
            interactor: The interactor that completed.
            context: The context it completed with.
        """
        self._interactor: 'Interactor' = interactor
        self._context: Context = context

    @property
    def interactor(self) -> 'Interactor':
        """The completed interactor."""
        return self._interactor

    @property
    def interactor_type(self) -> type['Interactor']:
        """The type of the completed interactor."""
        return type(self._interactor)

    @property
    def context(self) -> Context:
        """The context the interactor completed with."""
        return self._context

    def __repr__(self) -> str:
        return f"CompensationEntry({self.interactor_type.__name__})"
