# app/core/exceptions.py


class BusinessRuleError(Exception):
    """A write was refused because it would break a data invariant."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
