class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when operating on a record id that does not exist."""


class ReconciliationImbalance(DomainError):
    """Raised when confirming allocations that do not add up to the objective.

    `groups` holds the BalanceCheck rows that failed the tolerance check.
    """

    def __init__(self, message: str, groups=()):
        super().__init__(message)
        self.groups = list(groups)
