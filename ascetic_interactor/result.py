"""Execution result - outcome of running one interactor."""

import typing

from ascetic_interactor.context import Context


__all__ = (
    'ExecutionResult',
)


class ExecutionResult:
    """Either the resulting context or the error that caused the failure.

    Executors pass results between themselves; only ``Interactor.run()``
    turns a failure back into a raised exception.
    """

    def __init__(self, context: Context | None = None, error: Exception | None = None):
        self._context = context
        self._error = error

    @classmethod
    def success(cls, context: Context) -> 'ExecutionResult':
        return cls(context=context)

    @classmethod
    def failure(cls, error: Exception) -> 'ExecutionResult':
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def context(self) -> Context | None:
        """The resulting context, or None if the execution failed."""
        return self._context

    @property
    def error(self) -> Exception | None:
        """The failure cause, or None if the execution succeeded."""
        return self._error

    def unwrap(self) -> Context:
        """Return the context or raise the failure cause."""
        if self._error is not None:
            raise self._error
        return typing.cast(Context, self._context)

    def __repr__(self) -> str:
        if self.is_success:
            return f"ExecutionResult.success({self._context!r})"
        return f"ExecutionResult.failure({self._error!r})"
