"""Executor - runs interactors and rolls them back on failure."""

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from ascetic_interactor.compensation_entry import CompensationEntry
from ascetic_interactor.compensation_record import CompensationRecord
from ascetic_interactor.context import Context
from ascetic_interactor.invocation import invoke
from ascetic_interactor.mode import CompensationFailurePolicy, ExecutionMode
from ascetic_interactor.result import ExecutionResult

if TYPE_CHECKING:
    from ascetic_interactor.interactor import Interactor


__all__ = (
    'Executor',
    'CompositionError',
)


class Executor:
    """Executes interactors according to their execution mode.

    - Leaf interactors run perform() and compensate themselves on failure
    - Organizers run their composed children one after another, and on
      failure compensate the children that already completed, in reverse
      order
    - Empty interactors resolve with their unchanged context

    Failures are returned as ExecutionResult, never raised. Exceptions that
    are not Exception subclasses (cancellation, KeyboardInterrupt) are not
    treated as failures and propagate without compensation. In particular,
    cancelling an organizer skips the unwind: children that already
    completed are not compensated.
    """

    def __init__(self):
        self._logger = logging.getLogger(".".join((type(self).__module__, type(self).__name__)))

    async def execute(self, interactor: 'Interactor') -> ExecutionResult:
        """Execute an interactor of any mode.

        Args:
            interactor: The interactor to execute.

        Returns:
            Success with the resulting context, or failure with the cause.
        """
        if interactor.mode is ExecutionMode.LEAF:
            return await self.execute_leaf(interactor)
        if interactor.mode is ExecutionMode.PIPELINE:
            return await self.execute_pipeline(interactor)
        self._logger.debug("%s has nothing to do", _name(interactor))
        return ExecutionResult.success(interactor.context)

    async def execute_leaf(self, interactor: 'Interactor') -> ExecutionResult:
        """Run perform(), and compensate() if it fails.

        The original error is the failure cause, unless compensate() raises
        under the SURFACE policy.
        """
        self._logger.debug("Performing %s", _name(interactor))
        try:
            await invoke(interactor.perform, interactor.context)
        except Exception as error:
            self._logger.warning("%s failed, compensating: %r", _name(interactor), error)
            try:
                await invoke(interactor.compensate, interactor.context)
            except Exception as compensation_error:
                surfaced = self._on_compensation_failure(interactor, interactor, error, compensation_error)
                if surfaced is not None:
                    return ExecutionResult.failure(surfaced)
            return ExecutionResult.failure(error)

        self._logger.debug("%s performed", _name(interactor))
        return ExecutionResult.success(interactor.context)

    async def execute_pipeline(self, interactor: 'Interactor') -> ExecutionResult:
        """Run the composed children in order, rolling back on failure.

        Each child gets a snapshot of the current context and, on success,
        its context replaces the organizer's one.
        """
        self._logger.debug("Composing %s", _name(interactor))
        try:
            factories = self._compose_result(interactor, await invoke(interactor.compose, interactor.context))
        except Exception as error:
            self._logger.warning("%s failed to compose: %r", _name(interactor), error)
            return ExecutionResult.failure(error)

        record = CompensationRecord()
        for factory in factories:
            try:
                child = self._instantiate(interactor, factory, interactor.context.snapshot())
            except Exception as error:
                return await self._rollback(interactor, record, error)

            self._logger.debug("%s runs %s", _name(interactor), _name(child))
            result = await self.execute(child)
            if not result.is_success:
                return await self._rollback(interactor, record, result.error)

            interactor.context = result.context
            record.append(CompensationEntry(child, result.context))

        self._logger.debug("%s completed %d interactor(s)", _name(interactor), len(record))
        return ExecutionResult.success(interactor.context)

    async def _rollback(
            self,
            interactor: 'Interactor',
            record: CompensationRecord,
            error: Exception
    ) -> ExecutionResult:
        self._logger.warning(
            "%s failed, rolling back %d completed interactor(s): %r",
            _name(interactor), len(record), error
        )
        while record.is_in_progress:
            entry = record.last
            self._logger.debug("Compensating %s", _name(entry.interactor))
            try:
                await record.undo_last()
            except Exception as compensation_error:
                surfaced = self._on_compensation_failure(interactor, entry.interactor, error, compensation_error)
                if surfaced is not None:
                    return ExecutionResult.failure(surfaced)
        return ExecutionResult.failure(error)

    def _on_compensation_failure(
            self,
            owner: 'Interactor',
            compensated: 'Interactor',
            error: Exception,
            compensation_error: Exception
    ) -> Exception | None:
        """Apply the owner's compensation failure policy.

        Returns:
            The error to fail with right away, or None to keep the original
            error and continue.
        """
        if owner.compensation_failure_policy is CompensationFailurePolicy.SURFACE:
            if compensation_error is not error and compensation_error.__cause__ is None:
                compensation_error.__cause__ = error
            return compensation_error

        self._logger.error(
            "Compensation of %s failed after %r", _name(compensated), error,
            exc_info=compensation_error
        )
        note = f"Compensation of {_name(compensated)} failed: {compensation_error!r}"
        if compensation_error is not error and note not in getattr(error, "__notes__", ()):
            error.add_note(note)
        return None

    @staticmethod
    def _compose_result(interactor: 'Interactor', factories: object) -> list:
        if isinstance(factories, (str, bytes, Mapping)) or not isinstance(factories, Iterable):
            raise CompositionError(
                f"{_name(interactor)}.compose() must return a sequence of interactor classes, got {factories!r}"
            )
        return list(factories)

    @staticmethod
    def _instantiate(interactor: 'Interactor', factory: object, context: Context) -> 'Interactor':
        if not callable(factory):
            raise CompositionError(
                f"{_name(interactor)}.compose() returned {factory!r}, which is not an interactor class"
            )
        child = factory(context)
        if not isinstance(getattr(child, 'mode', None), ExecutionMode):
            raise CompositionError(
                f"{_name(interactor)}.compose() returned {factory!r}, which did not build an interactor"
            )
        return child


class CompositionError(TypeError):
    """Raised when compose() does not return a sequence of interactor classes."""
    pass


def _name(interactor: 'Interactor') -> str:
    return type(interactor).__qualname__
