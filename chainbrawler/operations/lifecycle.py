"""
Operation lifecycle.

Every tracked action runs through ``OperationLifecycle.run``:

    gate -> precondition -> pending -> processing -> completed | error

The gate and the precondition reject with a validation failure and leave the
store untouched. Once pending is written, exactly one terminal event is
emitted: the plan's success event or its failure event.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

from ..core.errors import describe_ledger_error
from ..core.event_bus import EventBus
from ..core.events import EventType, OperationEvent
from ..core.state_store import StateStore
from ..logging_config import get_logger, log_with_context
from ..schemas import (
    OperationErrorCodes,
    OperationResult,
    OperationState,
    OperationStatus,
    OperationType,
    ValidationResult,
    is_write_operation,
)
from ..validation import ValidationManager

logger = get_logger(__name__)

T = TypeVar('T')


def _handle_of(result) -> Optional[str]:
    return result if isinstance(result, str) else None


@dataclass
class OperationPlan(Generic[T]):
    """
    Everything the lifecycle needs to run one action.

    ``execute`` performs the ledger work and returns the action's data.
    ``payload`` builds the start and failure payloads; ``success_payload``
    builds the success payload from the data when the success event is not
    an OperationEvent. ``on_success`` applies store writes before the
    operation is marked completed.
    """
    operation_type: OperationType
    execute: Callable[[], Awaitable[T]]
    progress: str
    success_event: EventType = EventType.OPERATION_COMPLETED
    start_event: EventType = EventType.OPERATION_STARTED
    failure_event: EventType = EventType.OPERATION_FAILED
    success_message: str = "Operation completed"
    inputs: ValidationResult = field(default_factory=ValidationResult.ok)
    precondition: Optional[Callable[[], Awaitable[ValidationResult]]] = None
    requires_player: bool = True
    payload: Callable[..., OperationEvent] = OperationEvent
    success_payload: Optional[Callable[[T], BaseModel]] = None
    on_success: Optional[Callable[[T], None]] = None
    handle_of: Callable[[T], Optional[str]] = _handle_of


class OperationLifecycle:
    """Runs OperationPlans against one store and bus."""

    def __init__(self, store: StateStore, bus: EventBus, validator: ValidationManager):
        self._store = store
        self._bus = bus
        self._validator = validator

    def _gate(self, plan: OperationPlan) -> OperationResult:
        state = self._store.get_state()

        if plan.requires_player and not state.player_address:
            return OperationResult.failure("Player address not set", code=OperationErrorCodes.NO_PLAYER)

        if not plan.inputs:
            return OperationResult.failure(plan.inputs.reason, code=OperationErrorCodes.INVALID_INPUT)

        check = self._validator.can_start(plan.operation_type, state)
        if not check:
            return OperationResult.failure(check.reason, code=OperationErrorCodes.VALIDATION_ERROR)

        return OperationResult.ok()

    def _is_current(self, started: OperationState) -> bool:
        current = self._store.get_operation()
        return (
            current is not None
            and current.is_active
            and current.operation_type == started.operation_type
            and current.start_time == started.start_time
        )

    async def run(self, plan: OperationPlan[T]) -> OperationResult[T]:
        kind = plan.operation_type.value

        gate = self._gate(plan)
        if not gate.success:
            logger.info(f"Rejected {kind}: {gate.error}")
            return gate

        started = OperationState(
            is_active=True,
            operation_type=plan.operation_type,
            status=OperationStatus.PENDING,
            start_time=time.time(),
            progress=plan.progress,
            is_write_operation=is_write_operation(plan.operation_type),
        )

        if plan.precondition is not None:
            try:
                check = await plan.precondition()
            except Exception as e:
                return self._fail_before_processing(plan, started, e)

            if not check:
                logger.info(f"Rejected {kind}: {check.reason}")
                return OperationResult.failure(check.reason, code=OperationErrorCodes.PRECONDITION_FAILED)

            # The store may have changed while the precondition was awaited
            gate = self._gate(plan)
            if not gate.success:
                logger.info(f"Rejected {kind} after precondition: {gate.error}")
                return gate

        self._store.set_operation(started)
        self._bus.emit(plan.start_event, plan.payload(operation_type=plan.operation_type, message=plan.progress))

        processing = started.model_copy(update={"status": OperationStatus.PROCESSING})
        self._store.set_operation(processing)

        try:
            data = await plan.execute()
            if plan.on_success is not None and self._is_current(started):
                plan.on_success(data)
        except Exception as e:
            return self._fail(plan, started, e)

        handle = plan.handle_of(data)
        if not self._is_current(started):
            logger.warning(f"{kind} finished after the operation was cleared; result not recorded")
            return OperationResult.ok(data)

        self._store.set_operation(started.model_copy(update={
            "is_active": False,
            "status": OperationStatus.COMPLETED,
            "handle": handle,
            "progress": plan.success_message,
        }))

        log_with_context(
            logger, logging.INFO, f"Operation {kind} completed",
            handle=handle, duration=f"{time.time() - started.start_time:.2f}s",
        )

        if plan.success_payload is not None:
            payload = plan.success_payload(data)
        else:
            payload = plan.payload(operation_type=plan.operation_type, handle=handle, message=plan.success_message)
        self._bus.emit(plan.success_event, payload)

        return OperationResult.ok(data)

    def _fail_before_processing(self, plan: OperationPlan, started: OperationState, error: Exception) -> OperationResult:
        # A precondition query that raises is an operational failure
        self._store.set_operation(started)
        self._bus.emit(plan.start_event, plan.payload(operation_type=plan.operation_type, message=plan.progress))
        return self._fail(plan, started, error)

    def _fail(self, plan: OperationPlan, started: OperationState, error: Exception) -> OperationResult:
        info = describe_ledger_error(error)
        kind = plan.operation_type.value

        log_with_context(
            logger, logging.ERROR, f"Operation {kind} failed: {info.message}",
            code=info.code, category=info.category.name, retryable=info.retryable,
        )

        if self._is_current(started):
            self._store.set_operation(started.model_copy(update={
                "is_active": False,
                "status": OperationStatus.ERROR,
                "progress": "Operation failed",
                "error": info.message,
            }))
            self._bus.emit(
                plan.failure_event,
                plan.payload(operation_type=plan.operation_type, message="Operation failed", error=info.message),
            )

        return OperationResult.failure(info.message, code=OperationErrorCodes.LEDGER_ERROR, ledger_code=info.code)
