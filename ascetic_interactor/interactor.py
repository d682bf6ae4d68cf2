"""Interactor - base class for units of business logic with rollback."""

import logging
import typing
from collections.abc import Callable, Mapping

from ascetic_interactor.context import Context
from ascetic_interactor.executor import Executor
from ascetic_interactor.mode import CompensationFailurePolicy, ExecutionMode


__all__ = (
    'Interactor',
)


class Interactor:
    """Base class for interactors and organizers.

    A subclass defines one of two behaviors:
    - perform(context): does the actual work (a leaf interactor)
    - compose(context): returns the ordered interactor classes to run
      (an organizer)

    and may define compensate(context), which undoes the work when the
    interactor, or a later sibling of it, fails. The default compensate()
    does nothing.

    Behaviors may be plain or ``async`` methods. They receive the context
    of the instance, which is also available as ``self.context``.

    Example:
        class ChargeCard(Interactor):
            async def perform(self, context):
                context["charge_id"] = await gateway.charge(context["amount"])

            async def compensate(self, context):
                await gateway.refund(context["charge_id"])

        class PlaceOrder(Interactor):
            def compose(self, context):
                return [ReserveStock, ChargeCard, SendReceipt]

        context = await PlaceOrder.run({"amount": 100})
    """

    perform: Callable[[Context], typing.Any] | None = None
    compose: Callable[[Context], typing.Any] | None = None

    mode: typing.ClassVar[ExecutionMode] = ExecutionMode.EMPTY
    compensation_failure_policy: typing.ClassVar[CompensationFailurePolicy] = CompensationFailurePolicy.PRESERVE
    context_class: typing.ClassVar[type[Context]] = Context

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.mode = cls._resolve_mode()

    @classmethod
    def _resolve_mode(cls) -> ExecutionMode:
        has_perform = cls.perform is not None
        has_compose = cls.compose is not None
        if has_perform and has_compose:
            logging.getLogger(".".join((cls.__module__, cls.__name__))).warning(
                "%s defines both perform() and compose(); it will run as a leaf interactor",
                cls.__qualname__,
            )
        if has_perform:
            return ExecutionMode.LEAF
        if has_compose:
            return ExecutionMode.PIPELINE
        return ExecutionMode.EMPTY

    def __init__(self, context: Mapping[str, typing.Any] | None = None):
        """Initialize interactor.

        Args:
            context: Initial state. A Context is owned as is, any other
                mapping is wrapped into a new Context.
        """
        if context is None:
            context = self.context_class()
        elif not isinstance(context, Context):
            context = self.context_class(context)
        self._context: Context = context

    @property
    def context(self) -> Context:
        """The context this interactor works on."""
        return self._context

    @context.setter
    def context(self, value: Context) -> None:
        self._context = value

    def compensate(self, context: Context) -> typing.Any:
        """Undo the work of perform(). Does nothing unless overridden."""
        pass

    @classmethod
    async def run(cls, context: Mapping[str, typing.Any] | None = None) -> Context:
        """Run the interactor, rolling back on failure.

        Args:
            context: Initial state, an empty Context if omitted.

        Returns:
            The resulting context.

        Raises:
            Exception: The error raised by the failing perform() or compose(),
                after compensation has run.
        """
        interactor = cls(context)
        result = await Executor().execute(interactor)
        return result.unwrap()
