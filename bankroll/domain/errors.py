"""Domain exceptions for the bankroll ledger.

Validation problems are reported as values (see ``ValidationIssue``); the
exceptions below signal misuse of the ledger API itself.
"""


class LedgerError(Exception):
    """Base ledger error."""


class LockedFieldError(LedgerError):
    """Raised when a field frozen by verification is mutated."""

    def __init__(self, entity: str, field_name: str) -> None:
        self.entity = entity
        self.field_name = field_name
        super().__init__(
            f"{entity}.{field_name} is locked because the session is verified"
        )


class InvalidTransitionError(LedgerError):
    """Raised when a lifecycle transition is not allowed from a state."""

    def __init__(self, action: str, state: str) -> None:
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} a session in state {state}")


class ImportFormatError(LedgerError):
    """Raised when an export document cannot be parsed."""


__all__ = [
    "LedgerError",
    "LockedFieldError",
    "InvalidTransitionError",
    "ImportFormatError",
]
