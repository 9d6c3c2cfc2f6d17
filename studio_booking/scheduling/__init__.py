from studio_booking.scheduling.resolver import (
    AvailabilityResolver,
    generate_slots,
    is_date_selectable,
)
from studio_booking.scheduling.state_machine import (
    BookingStateMachine,
    InvalidTransitionError,
    TransitionTrigger,
    WorkflowState,
)
from studio_booking.scheduling.workflow import BookingRequestWorkflow, SelectionError

__all__ = [
    "AvailabilityResolver",
    "generate_slots",
    "is_date_selectable",
    "BookingStateMachine",
    "WorkflowState",
    "TransitionTrigger",
    "InvalidTransitionError",
    "BookingRequestWorkflow",
    "SelectionError",
]
