"""Interactors with automatic rollback.

An interactor is a unit of business logic with a forward action and an
optional compensating action. When the forward action fails, its
compensation runs before the error reaches the caller.

Interactors can be organized into an ordered pipeline. If any step of
the pipeline fails, the steps that already succeeded are compensated in
reverse order, then the original error is raised.

Key Components:
- Interactor: Base class (perform / compose + compensate, run())
- Context: The mutable state passed through a run
- Executor: Runs leaf interactors and organizers, performs rollback
- CompensationRecord: Completed steps of one organizer run
- ExecutionResult: Success context or failure cause

Example:
    from ascetic_interactor import Interactor

    class ReserveCar(Interactor):
        def perform(self, context):
            context["car"] = cars.reserve(context["vehicle_type"])

        def compensate(self, context):
            cars.cancel(context["car"])

    class ReserveHotel(Interactor):
        async def perform(self, context):
            context["room"] = await hotels.reserve(context["room_type"])

        async def compensate(self, context):
            await hotels.cancel(context["room"])

    class BookTrip(Interactor):
        def compose(self, context):
            return [ReserveCar, ReserveHotel]

    context = await BookTrip.run({"vehicle_type": "Compact", "room_type": "Suite"})
"""

from ascetic_interactor.compensation_entry import CompensationEntry
from ascetic_interactor.compensation_record import CompensationRecord, InvalidOperationError
from ascetic_interactor.context import Context
from ascetic_interactor.executor import CompositionError, Executor
from ascetic_interactor.interactor import Interactor
from ascetic_interactor.invocation import invoke
from ascetic_interactor.mode import CompensationFailurePolicy, ExecutionMode
from ascetic_interactor.result import ExecutionResult


__all__ = (
    'CompensationEntry',
    'CompensationFailurePolicy',
    'CompensationRecord',
    'CompositionError',
    'Context',
    'ExecutionMode',
    'ExecutionResult',
    'Executor',
    'Interactor',
    'InvalidOperationError',
    'invoke',
)
