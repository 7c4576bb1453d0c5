"""
PolySolver - Error conditions raised by the session model.
"""


class PolySolverError(Exception):
    """Base class for every condition the session model reports."""


class InsufficientOperands(PolySolverError, ValueError):
    """Fewer than two operands were staged when an operation was requested."""

    def __init__(self, count: int) -> None:
        super().__init__(
            f"At least 2 polynomials are needed to run an operation (got {count})."
        )
        self.count = count


class UnknownOperation(PolySolverError, ValueError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown operation: {kind!r}.")
        self.kind = kind


class OperationInProgress(PolySolverError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("Another operation is still waiting for its result.")


class RemoteComputationFailed(PolySolverError):
    """The computation service could not be reached or answered badly."""


class CorruptPersistedRecord(PolySolverError, ValueError):
    """The persisted transcript exists but does not decode."""


class OperandIndexError(PolySolverError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"No operand at position {index} (staged: {size}).")
        self.index = index
        self.size = size
