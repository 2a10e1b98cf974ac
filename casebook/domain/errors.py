"""Errors raised by the store, the persistence adapters and the transfer codec."""


class CasebookError(Exception):
    """Base error for this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CasebookError):
    """Raised when no case with the requested id exists."""

    def __init__(self, case_id: str):
        super().__init__(f"Case {case_id} not found")
        self.case_id = case_id


class CorruptStateError(CasebookError):
    """Raised when the persisted slot exists but cannot be read back."""


class InvalidFormatError(CasebookError):
    """Raised when an import payload is not a sequence of case entries."""
