"""Council error taxonomy."""


class CouncilError(Exception):
    """Base class for council errors."""

    retryable = False

    def __init__(self, message: str = "Council operation failed"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(CouncilError):
    """Referenced term, member or position does not exist."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class CapacityExceededError(CouncilError):
    """Position type has no remaining slot in the term."""

    def __init__(self, position_type, term_id: str):
        self.position_type = position_type
        self.term_id = term_id
        super().__init__(f"no available slots for {position_type}")


class DuplicateActiveAssignmentError(CouncilError):
    """Member already holds an active seat in the term."""

    def __init__(self, member_id: str, term_id: str):
        self.member_id = member_id
        self.term_id = term_id
        super().__init__(f"member {member_id} already has an active position in council {term_id}")


class InvalidPositionTypeError(CouncilError):
    """Position type is unknown or not a council seat."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid council position type: {value!r}")


class ValidationError(CouncilError):
    """Missing identifier or malformed input."""

    def __init__(self, message: str = "Validation error"):
        super().__init__(message)


class StoreUnavailableError(CouncilError):
    """Underlying persistence failed. Nothing was committed; safe to retry."""

    retryable = True

    def __init__(self, message: str = "Store unavailable"):
        super().__init__(message)


class OperationCancelledError(CouncilError):
    """Deadline elapsed before commit. Nothing was committed."""

    retryable = True

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} cancelled: deadline exceeded")

