"""
Farm visit reservation errors

Each error maps to one HTTP status through the platform exception handlers.
None of them is retryable except the platform StoreUnavailableError.
"""

from src.platform.exception.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
)


class SlotNotFoundError(NotFoundError):
    def __init__(self, message: str = 'Availability slot not found') -> None:
        super().__init__(message)


class VisitRequestNotFoundError(NotFoundError):
    def __init__(self, message: str = 'Visit request not found') -> None:
        super().__init__(message)


class SlotUnavailableError(ConflictError):
    def __init__(self, message: str = 'This time slot is not available') -> None:
        super().__init__(message)


class CapacityExceededError(ConflictError):
    def __init__(self, message: str = 'Not enough capacity left on this time slot') -> None:
        super().__init__(message)


class SlotExpiredError(DomainError):
    def __init__(self, message: str = 'This time slot has already passed') -> None:
        super().__init__(message)


class SlotInUseError(ConflictError):
    def __init__(
        self, message: str = 'Cannot delete a time slot with pending or approved visit requests'
    ) -> None:
        super().__init__(message)


class SlotConflictError(ConflictError):
    def __init__(self, message: str = 'A slot already exists for this date and time') -> None:
        super().__init__(message)


class InvalidTransitionError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class RequestTerminalError(ConflictError):
    def __init__(self, message: str) -> None:
        super().__init__(message)


class UnauthorizedError(ForbiddenError):
    def __init__(self, message: str = 'You are not allowed to perform this action') -> None:
        super().__init__(message)
