"""
Engine Errors.

Data problems degrade gracefully and are only logged. The errors below are
reserved for caller mistakes that should stop a run immediately.
"""


class EngineError(Exception):
    """Base exception for squad engine errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InputFormatError(EngineError, TypeError):
    """Raised when a top-level input is not the expected collection type."""

    pass


class InvalidConstraintsError(EngineError, ValueError):
    """Raised when squad constraints are internally inconsistent."""

    pass
